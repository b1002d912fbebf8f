from fastapi import APIRouter, Depends, Body
from sqlalchemy.orm import Session

from classroll.dependencies.db import get_db
from classroll.dependencies.auth import get_current_teacher_id, get_current_teacher
from classroll.schemas.classroom import ClassCreate, ClassResponse, ClassListResponse
from classroll.services.classroom_service import create_class, get_my_classes, get_class_for_teacher

router = APIRouter(
    dependencies=[Depends(get_current_teacher)]
)


@router.post("", response_model=ClassResponse, summary="반 생성")
def create_my_class(
    class_in: ClassCreate = Body(...),
    db: Session = Depends(get_db),
    teacher_id: str = Depends(get_current_teacher_id)
):
    """
    반 이름(필수), 과목, 강의실, 요일, 시간을 받아 반을 생성합니다.
    """
    return create_class(db, teacher_id, class_in)


@router.get("", response_model=ClassListResponse, summary="내 반 목록 조회")
def get_my_class_list(
    db: Session = Depends(get_db),
    teacher_id: str = Depends(get_current_teacher_id)
):
    """
    최근에 만든 반부터 반환합니다.
    """
    return ClassListResponse(classes=get_my_classes(db, teacher_id))


@router.get("/{class_id}", response_model=ClassResponse, summary="반 상세 조회")
def get_my_class(
    class_id: str,
    db: Session = Depends(get_db),
    teacher_id: str = Depends(get_current_teacher_id)
):
    return ClassResponse.model_validate(get_class_for_teacher(db, teacher_id, class_id))
