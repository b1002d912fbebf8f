import logging
from fastapi import APIRouter, Depends, Body
from sqlalchemy.orm import Session

from classroll.dependencies.db import get_db
from classroll.dependencies.auth import get_current_user
from classroll.dependencies.firebase_deps import get_verified_firebase_user
from classroll.models.user import User
from classroll.schemas.auth import AuthResponse, SignUpRequest, SignInRequest, SignOutRequest, SessionResponse, MessageResponse
from classroll.schemas.token import TokenRefreshRequest, TokenResponse
from classroll.services.auth_service import sign_up_teacher, sign_in, handle_oauth_authentication, get_session_info
from classroll.services.token_service import rotate_refresh_token, revoke_refresh_token

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/sign-up", response_model=AuthResponse, summary="교사 회원가입")
def teacher_sign_up(
    sign_up: SignUpRequest = Body(...),
    db: Session = Depends(get_db)
):
    """
    교사 회원가입 (비밀번호는 bcrypt 해시로 저장, 최소 6자)
    - 가입과 동시에 teacher 역할의 프로필 생성 및 토큰 발급
    """
    return sign_up_teacher(db, sign_up)


@router.post("/sign-in", response_model=AuthResponse, summary="이메일 로그인")
def email_sign_in(
    login_req: SignInRequest = Body(...),
    db: Session = Depends(get_db)
):
    """
    이메일/비밀번호 로그인. 응답의 redirect_to로 역할별 화면을 안내합니다.
    """
    return sign_in(db, login_req.email, login_req.password)


@router.post(
    "/oauth",
    response_model=AuthResponse,
    summary="교사 소셜 로그인",
    description="""소셜 로그인 ID 토큰을 검증하고, 교사 계정을 찾거나 생성합니다."""
)
async def teacher_oauth(
        db: Session = Depends(get_db),
        decoded_token: dict = Depends(get_verified_firebase_user)
):
    return handle_oauth_authentication(db, decoded_token, "teacher")


@router.post("/refresh", response_model=TokenResponse,
             summary="리프레시 토큰 갱신",
             description="만료된 Access Token을 갱신합니다."
             )
def refresh_token(
        req: TokenRefreshRequest = Body(...),
        db: Session = Depends(get_db)
):
    access_token, new_refresh_token = rotate_refresh_token(db, req.refresh_token)
    return TokenResponse(
        access_token=access_token,
        refresh_token=new_refresh_token
    )


@router.post("/sign-out", response_model=MessageResponse, summary="로그아웃")
def sign_out(
    req: SignOutRequest = Body(...),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    revoke_refresh_token(db, req.refresh_token, user.id)
    logger.info(f"Signed out: {user.email}")
    return MessageResponse(message="Signed out successfully")


@router.get("/session", response_model=SessionResponse, summary="현재 로그인 정보 조회")
def get_session(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """
    현재 토큰의 사용자와 프로필(이름, 역할)을 반환합니다.
    """
    return get_session_info(db, user)
