import logging
from fastapi import HTTPException, status
from passlib.hash import bcrypt
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import Optional

from classroll.models.user import User
from classroll.models.profile import Profile
from classroll.schemas.auth import AuthResponse, SessionResponse, SignUpRequest, StudentSignUpRequest
from classroll.services.token_service import create_access_token, create_refresh_token_with_rotation
from classroll.services.student_service import find_roster_match, get_roster_entries_by_email

logger = logging.getLogger(__name__)

TEACHER = "teacher"
STUDENT = "student"

# 로그인 후 역할별로 이동할 화면
REDIRECTS = {
    TEACHER: "/demo",
    STUDENT: "/student-dashboard",
}

STUDENT_NOT_FOUND = (
    "Student not found. Please check your details or contact your teacher to add you to the system."
)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def get_profile(db: Session, user_id: str) -> Optional[Profile]:
    return db.query(Profile).filter(Profile.user_id == user_id).first()


def issue_auth_response(db: Session, user: User, profile: Profile, message: str) -> AuthResponse:
    payload = {"sub": user.id, "role": profile.role}
    access_token = create_access_token(payload)
    refresh_token = create_refresh_token_with_rotation(db, user.id)

    return AuthResponse(
        user_id=user.id,
        email=user.email,
        full_name=profile.full_name,
        role=profile.role,
        redirect_to=REDIRECTS.get(profile.role, "/"),
        access_token=access_token,
        refresh_token=refresh_token,
        message=message
    )


def _create_account(db: Session, email: str, full_name: Optional[str], role: str,
                    password: Optional[str] = None, firebase_uid: Optional[str] = None) -> tuple[User, Profile]:
    """ users + profiles 두 행을 한 트랜잭션으로 생성 """
    user = User(
        email=email,
        password=bcrypt.hash(password) if password else None,
        firebase_uid=firebase_uid
    )
    try:
        db.add(user)
        db.flush()
        profile = Profile(user_id=user.id, full_name=full_name, role=role)
        db.add(profile)
        db.commit()
        db.refresh(user)
        db.refresh(profile)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error creating %s account for %s", role, email)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create account")
    return user, profile


def sign_up_teacher(db: Session, sign_up: SignUpRequest) -> AuthResponse:
    if get_user_by_email(db, sign_up.email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already registered")

    user, profile = _create_account(db, sign_up.email, sign_up.full_name, TEACHER, password=sign_up.password)
    logger.info(f"Teacher account created: {user.email}")
    return issue_auth_response(db, user, profile, "Account created.")


def sign_up_student(db: Session, sign_up: StudentSignUpRequest) -> AuthResponse:
    """
    학생 회원가입
    - 교사가 먼저 등록한 명단에 이름/이메일/학번이 모두 정확히 일치하는 학생이 있어야 함
    - 일치하지 않으면 계정을 만들기 전에 거절한다
    """
    roster_entry = find_roster_match(db, sign_up.full_name, sign_up.email, sign_up.student_id)
    if not roster_entry:
        logger.info(f"Student sign-up rejected, no roster match: {sign_up.email}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=STUDENT_NOT_FOUND)

    if get_user_by_email(db, sign_up.email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already registered")

    user, profile = _create_account(db, sign_up.email, sign_up.full_name, STUDENT, password=sign_up.password)
    logger.info(f"Student account created: {user.email} (roster {roster_entry.id})")
    return issue_auth_response(db, user, profile, "Account created.")


def sign_in(db: Session, email: str, password: str) -> AuthResponse:
    user = get_user_by_email(db, email)
    if not user or not user.password or not bcrypt.verify(password, user.password):
        logger.info(f"Sign-in failed: {email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid login credentials")

    profile = get_profile(db, user.id)
    if not profile:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

    logger.info(f"Sign-in succeeded: {email} ({profile.role})")
    return issue_auth_response(db, user, profile, "Successfully signed in.")


def handle_oauth_authentication(db: Session, decoded_token: dict, role: str) -> AuthResponse:
    """
    Firebase ID 토큰을 검증한 결과(decoded_token)로 소셜 로그인 사용자를 처리한다.
    - 이미 연결된 계정이면 로그인
    - 같은 이메일의 비밀번호 계정이 있으면 firebase uid를 연결
    - 없으면 새 계정 생성 (학생은 명단에 이메일이 있어야 함)
    """
    uid = decoded_token['uid']
    email = decoded_token.get('email')
    name = decoded_token.get('name')

    if not email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email is required for registration but not found in your account."
        )

    user = db.query(User).filter(User.firebase_uid == uid).first()
    if user:
        profile = get_profile(db, user.id)
        return issue_auth_response(db, user, profile, "Successfully signed in.")

    # 이메일로 기존 계정에 연결하거나 새 계정을 만들 때는 인증된 이메일만 허용
    if not decoded_token.get('email_verified'):
        logger.info(f"OAuth rejected, unverified email: {email}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Please verify your email address with your sign-in provider first."
        )

    user = get_user_by_email(db, email)
    if user:
        if user.firebase_uid and user.firebase_uid != uid:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"This email ({email}) is already registered with another account."
            )
        user.firebase_uid = uid
        db.commit()
        profile = get_profile(db, user.id)
        return issue_auth_response(db, user, profile, "Successfully signed in.")

    if role == STUDENT:
        roster = get_roster_entries_by_email(db, email)
        if not roster:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=STUDENT_NOT_FOUND)
        name = roster[0].name

    user, profile = _create_account(db, email, name, role, firebase_uid=uid)
    logger.info(f"OAuth account created: {email} ({role})")
    return issue_auth_response(db, user, profile, "New account created and signed in.")


def get_session_info(db: Session, user: User) -> SessionResponse:
    profile = get_profile(db, user.id)
    if not profile:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return SessionResponse(
        user_id=user.id,
        email=user.email,
        full_name=profile.full_name,
        role=profile.role
    )
