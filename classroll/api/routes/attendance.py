from datetime import date, datetime
from typing import Optional
from fastapi import APIRouter, Depends, Body, Query
from sqlalchemy.orm import Session

from classroll.dependencies.db import get_db
from classroll.dependencies.auth import get_current_teacher_id, get_current_teacher
from classroll.schemas.attendance import AttendanceSaveRequest, AttendanceSaveResponse, AttendanceSheetResponse
from classroll.schemas.classroom import ClassOptionListResponse
from classroll.services.attendance_service import load_attendance_sheet, save_attendance_sheet
from classroll.services.classroom_service import get_class_options

router = APIRouter(
    dependencies=[Depends(get_current_teacher)]
)


@router.get("/classes", response_model=ClassOptionListResponse, summary="출석용 반 선택 목록")
def get_attendance_class_options(
    db: Session = Depends(get_db),
    teacher_id: str = Depends(get_current_teacher_id)
):
    return ClassOptionListResponse(classes=get_class_options(db, teacher_id))


@router.get("", response_model=AttendanceSheetResponse, summary="출석부 조회")
def get_attendance_sheet(
    class_id: str = Query(...),
    on_date: Optional[date] = Query(None, alias="date"),
    db: Session = Depends(get_db),
    teacher_id: str = Depends(get_current_teacher_id)
):
    """
    선택한 반의 전체 명단과 해당 날짜의 출석 기록을 합쳐 반환합니다.
    - 기록이 없는 학생은 absent
    - 날짜를 주지 않으면 오늘
    """
    return load_attendance_sheet(db, teacher_id, class_id, on_date or datetime.utcnow().date())


@router.put("", response_model=AttendanceSaveResponse, summary="출석부 저장")
def put_attendance_sheet(
    req: AttendanceSaveRequest = Body(...),
    db: Session = Depends(get_db),
    teacher_id: str = Depends(get_current_teacher_id)
):
    """
    (반, 날짜)의 출석 기록을 통째로 교체합니다.
    - 제출하지 않은 학생은 absent로 저장
    - 같은 내용을 두 번 저장해도 결과는 같음
    """
    return save_attendance_sheet(db, teacher_id, req.class_id, req.date, req.records)
