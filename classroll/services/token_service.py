import jwt
import uuid
from datetime import datetime, timedelta
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from classroll.models.token import RefreshToken
from classroll.models.profile import Profile
from classroll.core.config import settings

def create_access_token(data: dict) -> str:
    to_encode = data.copy()
    expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

def create_refresh_token_with_rotation(db: Session, user_id: str) -> str:
    # 같은 초에 두 번 발급돼도 토큰 문자열이 겹치지 않도록 jti를 넣는다
    now = datetime.utcnow()
    expire = now + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    to_encode = {"sub": user_id, "exp": expire, "jti": uuid.uuid4().hex}
    refresh_token = jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

    db_token = RefreshToken(
        token=refresh_token,
        user_id=user_id,
        expired_at=expire
    )
    db.add(db_token)
    db.commit()
    db.refresh(db_token)

    return refresh_token

def rotate_refresh_token(db: Session, refresh_token: str) -> tuple[str, str]:
    try:
        payload = jwt.decode(refresh_token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        user_id = payload.get("sub")
        if not user_id:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload")

        db_token = db.query(RefreshToken).filter_by(token=refresh_token).first()
        if not db_token or db_token.is_revoked:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Refresh token is invalid or already used")

        profile = db.query(Profile).filter(Profile.user_id == user_id).first()
        if not profile:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

        db_token.is_revoked = True
        db.commit()

        new_access_token = create_access_token({"sub": user_id, "role": profile.role})
        new_refresh_token = create_refresh_token_with_rotation(db, user_id)

        return new_access_token, new_refresh_token

    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Refresh token expired")
    except jwt.PyJWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

def revoke_refresh_token(db: Session, refresh_token: str, user_id: str) -> None:
    """ 로그아웃: 본인 소유의 리프레시 토큰을 폐기한다. 이미 폐기된 토큰이어도 에러는 아니다. """
    db_token = db.query(RefreshToken).filter_by(token=refresh_token, user_id=user_id).first()
    if not db_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Refresh token is invalid")
    db_token.is_revoked = True
    db.commit()
