import logging
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from fastapi import HTTPException, status

from classroll.models.classroom import Classroom
from classroll.schemas.classroom import ClassCreate, ClassResponse, ClassOption

logger = logging.getLogger(__name__)


def create_class(db: Session, teacher_id: str, class_in: ClassCreate) -> ClassResponse:
    classroom = Classroom(
        teacher_id=teacher_id,
        name=class_in.name,
        subject=class_in.subject,
        room=class_in.room,
        schedule_days=class_in.schedule_days,
        schedule_time=class_in.schedule_time
    )
    try:
        db.add(classroom)
        db.commit()
        db.refresh(classroom)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error creating class for teacher %s", teacher_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create class")
    logger.info(f"Class created - teacher: {teacher_id}, class: {classroom.id}")
    return ClassResponse.model_validate(classroom)


def get_my_classes(db: Session, teacher_id: str) -> list[ClassResponse]:
    classes = (
        db.query(Classroom)
        .filter(Classroom.teacher_id == teacher_id)
        .order_by(Classroom.created_at.desc())
        .all()
    )
    return [ClassResponse.model_validate(c) for c in classes]


def get_class_options(db: Session, teacher_id: str) -> list[ClassOption]:
    """ 출석 화면의 반 선택 목록 (이름순) """
    classes = db.query(Classroom).filter(Classroom.teacher_id == teacher_id).order_by(Classroom.name).all()
    return [ClassOption(id=c.id, name=c.name) for c in classes]


def get_class_for_teacher(db: Session, teacher_id: str, class_id: str) -> Classroom:
    # 본인 반인지 확인
    classroom = db.query(Classroom).filter(Classroom.id == class_id, Classroom.teacher_id == teacher_id).first()
    if not classroom:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Class not found")
    return classroom
