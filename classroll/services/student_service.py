# /classroll/services/student_service.py
import logging
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from fastapi import HTTPException, status
from typing import Optional

from classroll.models.student import Student
from classroll.schemas.student import StudentCreate, StudentResponse
from classroll.services.classroom_service import get_class_for_teacher

logger = logging.getLogger(__name__)


def to_student_response(student: Student) -> StudentResponse:
    return StudentResponse(
        id=student.id,
        name=student.name,
        email=student.email,
        student_id=student.student_id,
        class_id=student.class_id,
        class_name=student.classroom.name if student.classroom else None,
        created_at=student.created_at
    )


def create_student(db: Session, teacher_id: str, student_in: StudentCreate) -> StudentResponse:
    """ 교사 명단에 학생 추가. 반을 지정했다면 본인 소유의 반이어야 한다. """
    if student_in.class_id:
        get_class_for_teacher(db, teacher_id, student_in.class_id)

    db_student = Student(
        teacher_id=teacher_id,
        name=student_in.name,
        email=student_in.email,
        student_id=student_in.student_id,
        class_id=student_in.class_id
    )
    try:
        db.add(db_student)
        db.commit()
        db.refresh(db_student)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error creating student for teacher %s", teacher_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to add student")
    logger.info(f"Student added - teacher: {teacher_id}, student: {db_student.id}")
    return to_student_response(db_student)


def get_my_students(db: Session, teacher_id: str) -> list[StudentResponse]:
    students = (
        db.query(Student)
        .filter(Student.teacher_id == teacher_id)
        .order_by(Student.created_at.desc())
        .all()
    )
    return [to_student_response(s) for s in students]


def get_class_roster(db: Session, class_id: str) -> list[Student]:
    """ 반 명단 (이름순) """
    return db.query(Student).filter(Student.class_id == class_id).order_by(Student.name).all()


def find_roster_match(db: Session, name: str, email: str, student_id: str) -> Optional[Student]:
    """ 학생 회원가입 시 이름/이메일/학번이 모두 정확히 일치하는 명단 항목 조회 """
    return (
        db.query(Student)
        .filter(Student.email == email, Student.student_id == student_id, Student.name == name)
        .first()
    )


def get_roster_entries_by_email(db: Session, email: str) -> list[Student]:
    return db.query(Student).filter(Student.email == email).order_by(Student.created_at).all()
