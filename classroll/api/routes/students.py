from fastapi import APIRouter, Depends, Body
from sqlalchemy.orm import Session

from classroll.dependencies.db import get_db
from classroll.dependencies.auth import get_current_teacher_id, get_current_teacher
from classroll.schemas.student import StudentCreate, StudentResponse, StudentListResponse
from classroll.services.student_service import create_student, get_my_students

router = APIRouter(
    dependencies=[Depends(get_current_teacher)]
)


@router.post("", response_model=StudentResponse, summary="명단에 학생 추가")
def add_student(
    student_in: StudentCreate = Body(...),
    db: Session = Depends(get_db),
    teacher_id: str = Depends(get_current_teacher_id)
):
    """
    교사 명단에 학생을 추가합니다.
    - 이름은 필수, 이메일/학번/반은 선택
    - 학생이 직접 가입하려면 이름/이메일/학번이 등록되어 있어야 함
    """
    return create_student(db, teacher_id, student_in)


@router.get("", response_model=StudentListResponse, summary="내 명단 조회")
def get_student_list(
    db: Session = Depends(get_db),
    teacher_id: str = Depends(get_current_teacher_id)
):
    return StudentListResponse(students=get_my_students(db, teacher_id))
