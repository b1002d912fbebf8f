import logging
from datetime import date, datetime

from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from classroll.models.attendance import Attendance
from classroll.models.student import Student
from classroll.schemas.attendance import (
    AttendanceEntry, AttendanceSheetRow, AttendanceSheetResponse, AttendanceSaveResponse
)
from classroll.services.classroom_service import get_class_for_teacher
from classroll.services.student_service import get_class_roster

logger = logging.getLogger(__name__)

DEFAULT_STATUS = "absent"


def _check_not_future(on_date: date) -> None:
    if on_date > datetime.utcnow().date():
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Attendance date cannot be in the future")


def build_status_map(roster: list[Student], records: list) -> dict[str, dict]:
    """
    명단 전체를 기본값(absent, 메모 없음)으로 채운 뒤 기존/제출된 기록으로 덮어쓴다.
    명단에 없는 학생 기록은 무시한다.
    """
    status_map = {s.id: {"status": DEFAULT_STATUS, "notes": ""} for s in roster}
    for record in records:
        if record.student_id in status_map:
            status_map[record.student_id] = {"status": record.status, "notes": record.notes or ""}
    return status_map


def load_attendance_sheet(db: Session, teacher_id: str, class_id: str, on_date: date) -> AttendanceSheetResponse:
    get_class_for_teacher(db, teacher_id, class_id)
    roster = get_class_roster(db, class_id)
    rows = db.query(Attendance).filter(Attendance.class_id == class_id, Attendance.date == on_date).all()
    status_map = build_status_map(roster, rows)

    return AttendanceSheetResponse(
        class_id=class_id,
        date=on_date,
        students=[
            AttendanceSheetRow(
                student_id=s.id,
                name=s.name,
                student_number=s.student_id,
                status=status_map[s.id]["status"],
                notes=status_map[s.id]["notes"]
            ) for s in roster
        ]
    )


def save_attendance_sheet(db: Session, teacher_id: str, class_id: str, on_date: date,
                          records: list[AttendanceEntry]) -> AttendanceSaveResponse:
    """
    출석부 저장 (날짜 단위 덮어쓰기)
    - 제출된 상태를 명단 기본값 위에 병합
    - (반, 날짜)의 기존 행을 모두 지우고 병합 결과를 일괄 삽입
    - 삭제와 삽입은 한 트랜잭션이라 삽입 실패 시 기존 기록이 남는다
    """
    get_class_for_teacher(db, teacher_id, class_id)
    _check_not_future(on_date)
    roster = get_class_roster(db, class_id)

    roster_ids = {s.id for s in roster}
    unknown = [r.student_id for r in records if r.student_id not in roster_ids]
    if unknown:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Students not on this class roster: {', '.join(unknown)}"
        )

    status_map = build_status_map(roster, records)
    try:
        db.query(Attendance).filter(Attendance.class_id == class_id, Attendance.date == on_date).delete()
        db.add_all([
            Attendance(
                student_id=student_id,
                class_id=class_id,
                teacher_id=teacher_id,
                date=on_date,
                status=entry["status"],
                notes=entry["notes"] or None
            ) for student_id, entry in status_map.items()
        ])
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error saving attendance for class %s on %s", class_id, on_date)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save attendance")

    logger.info(f"Attendance saved - class: {class_id}, date: {on_date}, rows: {len(status_map)}")
    return AttendanceSaveResponse(
        class_id=class_id,
        date=on_date,
        saved=len(status_map),
        message="Attendance saved successfully"
    )


def record_scan_attendance(db: Session, student: Student, class_id: str, teacher_id: str, on_date: date) -> Attendance:
    """ QR 스캔 출석: 해당 학생의 그날 기록을 present로 교체 """
    try:
        db.query(Attendance).filter(
            Attendance.student_id == student.id,
            Attendance.class_id == class_id,
            Attendance.date == on_date
        ).delete()
        record = Attendance(
            student_id=student.id,
            class_id=class_id,
            teacher_id=teacher_id,
            date=on_date,
            status="present"
        )
        db.add(record)
        db.commit()
        db.refresh(record)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error recording scan attendance for student %s", student.id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to mark attendance")
    return record
