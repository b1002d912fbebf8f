from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from classroll.dependencies.db import get_db
from classroll.dependencies.auth import get_current_user, get_current_teacher
from classroll.models.user import User
from classroll.schemas.dashboard import TeacherDashboardResponse
from classroll.services.dashboard_service import get_teacher_dashboard

router = APIRouter(
    dependencies=[Depends(get_current_teacher)]
)


@router.get("", response_model=TeacherDashboardResponse, summary="교사 대시보드")
def get_dashboard(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """
    교사 프로필과 반/학생/진행 중인 QR 세션 수를 반환합니다.
    """
    return get_teacher_dashboard(db, user)
