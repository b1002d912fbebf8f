# /classroll/main.py
import logging
import os
import time
from logging.handlers import RotatingFileHandler
from fastapi import FastAPI, Request
from contextlib import asynccontextmanager # Lifespan 사용 위해 import

# --- Core / Config ---
from classroll.core.config import settings
from classroll.core.firebase import initialize_firebase # Firebase 초기화 함수 import
from classroll.db.base import Base
from classroll.db.session import engine

# --- API Routers ---
from classroll.api.routes import index as index_router
from classroll.api.routes import auth as auth_router
from classroll.api.routes import student_auth as student_auth_router
from classroll.api.routes import demo as demo_router
from classroll.api.routes import student_dashboard as student_dashboard_router
from classroll.api.routes import classes as classes_router
from classroll.api.routes import students as students_router
from classroll.api.routes import attendance as attendance_router
from classroll.api.routes import qr_sessions as qr_sessions_router
from classroll.api.routes import scan as scan_router
from classroll.api.routes import websocket as websocket_router # websocket 라우터 import

# --- 미들웨어 import ---
from fastapi.middleware.cors import CORSMiddleware


logging.basicConfig(
    level=settings.LOG_LEVEL, # 기본 INFO 레벨 이상의 로그를 모두 출력
    format="%(asctime)s - %(levelname)s - %(message)s", # 로그 형식 지정
    force=True # 다른 라이브러리에 의해 이미 설정되었더라도 강제로 재설정
)


def add_file_handler(log_file: str) -> RotatingFileHandler:
    """ 로그 파일 핸들러를 루트 로거에 붙인다. 로그 디렉터리가 없으면 먼저 만든다. """
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    file_handler = RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=5)
    file_handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s"))
    logging.getLogger().addHandler(file_handler)
    return file_handler


if settings.LOG_FILE:
    add_file_handler(settings.LOG_FILE)


# --- Lifespan (애플리케이션 시작/종료 이벤트) ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # 애플리케이션 시작 시 실행될 코드
    Base.metadata.create_all(bind=engine)
    initialize_firebase() # 키가 없으면 소셜 로그인만 비활성화

    yield

# --- FastAPI App Instance ---
app = FastAPI(
    title="Classroll API",
    lifespan=lifespan # <<<--- FastAPI 앱 생성 시 lifespan을 등록합니다!
)

@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()

    # 다음 미들웨어나 실제 API 엔드포인트를 호출
    response = await call_next(request)

    process_time = time.time() - start_time

    # 응답 헤더에 처리 시간 추가
    response.headers["X-Process-Time"] = str(process_time)

    # 로그에 API 경로와 처리 시간 기록
    logging.info(
        f"Request processed: {request.method} {request.url.path} - Completed in {process_time:.4f} secs"
    )

    return response



# --- CORS 미들웨어 설정 ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- 라우트 등록 ---
app.include_router(
    index_router.router,
    prefix="",
    tags=["index"]
)

app.include_router(
    auth_router.router,
    prefix="/api/v1/auth",
    tags=["Authentication"]
)

app.include_router(
    student_auth_router.router,
    prefix="/api/v1/student-auth",
    tags=["Authentication"]
)

app.include_router(
    demo_router.router,
    prefix="/api/v1/demo",
    tags=["dashboard"]
)

app.include_router(
    student_dashboard_router.router,
    prefix="/api/v1/student-dashboard",
    tags=["dashboard"]
)

app.include_router(
    classes_router.router,
    prefix="/api/v1/classes",
    tags=["classes"]
)

app.include_router(
    students_router.router,
    prefix="/api/v1/students",
    tags=["students"]
)

app.include_router(
    attendance_router.router,
    prefix="/api/v1/attendance",
    tags=["attendance"]
)

app.include_router(
    qr_sessions_router.router,
    prefix="/api/v1/qr-sessions",
    tags=["qr-sessions"]
)

app.include_router(
    scan_router.router,
    prefix="/api/v1/scan",
    tags=["scan"]
)

app.include_router(
    websocket_router.websocket_router, # websocket.py의 websocket_router 객체 사용
    prefix="",
    tags=["websocket"]
)

# 존재하지 않는 경로는 모두 404 (반드시 마지막에 등록)
app.include_router(index_router.catch_all_router)
