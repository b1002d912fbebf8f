import os
import logging
import firebase_admin
from firebase_admin import credentials

from classroll.core.config import settings

logger = logging.getLogger(__name__)


def initialize_firebase() -> bool:
    """
    서비스 계정 키 경로를 설정에서 읽어 Firebase Admin SDK를 초기화합니다.
    소셜 로그인(OAuth) ID 토큰 검증에만 사용되며, 키가 없으면 OAuth 로그인은 비활성화됩니다.
    애플리케이션 시작 시 한 번 호출되어야 합니다.
    """
    key_path = settings.FIREBASE_SERVICE_ACCOUNT_KEY_PATH

    if not key_path:
        logger.warning("FIREBASE_SERVICE_ACCOUNT_KEY_PATH is not set; OAuth sign-in is disabled.")
        return False
    if not os.path.exists(key_path):
        raise FileNotFoundError(f"Firebase 서비스 계정 키 파일을 찾을 수 없습니다: {key_path}")

    if not firebase_admin._apps:
        cred = credentials.Certificate(key_path)
        firebase_admin.initialize_app(cred)
        logger.info("Firebase Admin SDK initialized.")
    else:
        logger.info("Firebase Admin SDK already initialized.")
    return True
