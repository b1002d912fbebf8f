from fastapi import APIRouter, Depends, Body
from sqlalchemy.orm import Session

from classroll.dependencies.db import get_db
from classroll.dependencies.firebase_deps import get_verified_firebase_user
from classroll.schemas.auth import AuthResponse, SignInRequest, StudentSignUpRequest
from classroll.services.auth_service import sign_up_student, sign_in, handle_oauth_authentication

router = APIRouter()


@router.post("/sign-up", response_model=AuthResponse, summary="학생 회원가입")
def student_sign_up(
    sign_up: StudentSignUpRequest = Body(...),
    db: Session = Depends(get_db)
):
    """
    학생 회원가입
    - 교사가 먼저 명단에 등록한 학생만 가입 가능
    - 이름, 학번, 이메일이 명단과 정확히 일치해야 함 (불일치 시 404)
    """
    return sign_up_student(db, sign_up)


@router.post("/sign-in", response_model=AuthResponse, summary="학생 로그인")
def student_sign_in(
    login_req: SignInRequest = Body(...),
    db: Session = Depends(get_db)
):
    return sign_in(db, login_req.email, login_req.password)


@router.post("/oauth", response_model=AuthResponse, summary="학생 소셜 로그인")
async def student_oauth(
        db: Session = Depends(get_db),
        decoded_token: dict = Depends(get_verified_firebase_user)
):
    """
    소셜 로그인 ID 토큰으로 학생 계정을 찾거나 생성합니다.
    새 계정은 명단에 같은 이메일이 있을 때만 만들어집니다.
    """
    return handle_oauth_authentication(db, decoded_token, "student")
