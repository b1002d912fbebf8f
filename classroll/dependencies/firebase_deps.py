# /classroll/dependencies/firebase_deps.py
import logging
import firebase_admin
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from firebase_admin import auth

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer()


def _invalid_token(detail: str, description: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": f"Bearer error=\"invalid_token\", error_description=\"{description}\""},
    )


def verify_social_id_token(id_token: str) -> dict:
    """
    소셜 로그인(Google 등)에서 받은 Firebase ID 토큰을 검증하고 uid/email/name이 담긴 dict를 반환한다.
    서버에 서비스 계정 키가 없으면 소셜 로그인 자체를 503으로 막는다.
    """
    if not firebase_admin._apps:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Social login is not configured on this server.",
        )

    try:
        return auth.verify_id_token(id_token)
    except auth.ExpiredIdTokenError:
        raise _invalid_token("ID token has expired.", "The token has expired")
    except auth.InvalidIdTokenError as e:
        raise _invalid_token(f"Invalid ID token: {e}", "The token is invalid")
    except Exception:
        logger.exception("Unexpected error during ID token verification")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal server error occurred during token verification.",
        )


async def get_verified_firebase_user(
    token: HTTPAuthorizationCredentials = Depends(bearer_scheme)
) -> dict:
    """ Authorization: Bearer <ID 토큰> 헤더를 검증하는 dependency """
    return verify_social_id_token(token.credentials)
