import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./classroll.db")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "jwt-secret")
    JWT_ALGORITHM = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 15))
    REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", 7))

    # QR 출석 세션
    QR_SESSION_TTL_MINUTES = int(os.getenv("QR_SESSION_TTL_MINUTES", 10))
    QR_CODE_WIDTH = int(os.getenv("QR_CODE_WIDTH", 256))
    QR_CODE_MARGIN = int(os.getenv("QR_CODE_MARGIN", 2))
    SESSION_CODE_LENGTH = int(os.getenv("SESSION_CODE_LENGTH", 13))
    COUNTDOWN_INTERVAL_SECONDS = float(os.getenv("COUNTDOWN_INTERVAL_SECONDS", 1))

    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE = os.getenv("LOG_FILE")

    FIREBASE_SERVICE_ACCOUNT_KEY_PATH = os.getenv("FIREBASE_SERVICE_ACCOUNT_KEY_PATH")

settings = Settings()
