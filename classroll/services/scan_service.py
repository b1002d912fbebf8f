import json
import logging
from datetime import datetime

from fastapi import HTTPException, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from classroll.models.qr_session import QRSession
from classroll.models.student import Student
from classroll.models.user import User
from classroll.schemas.qr_session import QRPayload
from classroll.schemas.scan import ScanResponse, StudentScanResponse
from classroll.services.attendance_service import record_scan_attendance

logger = logging.getLogger(__name__)


def parse_qr_payload(raw_text: str) -> QRPayload:
    try:
        data = json.loads(raw_text)
        return QRPayload.model_validate(data)
    except (json.JSONDecodeError, ValidationError):
        logger.info(f"Unreadable QR payload: {raw_text[:50]!r}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid QR code format")


def verify_scanned_session(db: Session, payload: QRPayload, now: datetime = None) -> QRSession:
    """
    스캔한 코드가 살아있는 세션인지 확인
    - (id, code, is_active=True)로 조회되지 않으면 "Invalid or expired"
    - 조회됐지만 만료 시각이 지났으면 "expired"
    """
    session = db.query(QRSession).filter(
        QRSession.id == payload.sessionId,
        QRSession.session_code == payload.sessionCode,
        QRSession.is_active == True
    ).first()
    if not session:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invalid or expired QR code")

    now = now or datetime.utcnow()
    if now > session.expires_at:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail="QR code session has expired")
    return session


def handle_scan_result(db: Session, raw_text: str, now: datetime = None) -> ScanResponse:
    payload = parse_qr_payload(raw_text)
    session = verify_scanned_session(db, payload, now)
    return ScanResponse(
        session_id=session.id,
        class_id=session.class_id,
        class_name=payload.className,
        message=f"Successfully scanned QR code for {payload.className}"
    )


def handle_student_scan(db: Session, user: User, raw_text: str, now: datetime = None) -> StudentScanResponse:
    """
    로그인한 학생의 스캔: 코드 검증 후 해당 반 명단에 있는 학생이면 오늘 날짜로 출석(present) 처리
    """
    now = now or datetime.utcnow()
    payload = parse_qr_payload(raw_text)
    session = verify_scanned_session(db, payload, now)

    roster_entry = db.query(Student).filter(
        Student.email == user.email,
        Student.class_id == session.class_id
    ).first()
    if not roster_entry:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You are not on the roster for this class")

    today = now.date()
    record_scan_attendance(db, roster_entry, session.class_id, session.teacher_id, today)
    logger.info(f"Attendance marked by QR scan - student: {roster_entry.id}, class: {session.class_id}, date: {today}")
    return StudentScanResponse(
        session_id=session.id,
        class_id=session.class_id,
        class_name=payload.className,
        message=f"Successfully scanned QR code for {payload.className}",
        student_id=roster_entry.id,
        date=today,
        status="present"
    )
