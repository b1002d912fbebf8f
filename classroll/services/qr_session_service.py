import json
import logging
import secrets
import string
from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from classroll.core.config import settings
from classroll.models.qr_session import QRSession
from classroll.schemas.qr_session import QRPayload, QRSessionResponse
from classroll.services.classroom_service import get_class_for_teacher
from classroll.services.countdown import remaining_ms, format_time_left
from classroll.utils.qr_code import render_qr_data_url

logger = logging.getLogger(__name__)

SESSION_CODE_ALPHABET = string.ascii_lowercase + string.digits


def new_session_code(length: int = None) -> str:
    length = length or settings.SESSION_CODE_LENGTH
    return "".join(secrets.choice(SESSION_CODE_ALPHABET) for _ in range(length))


def build_qr_payload(session: QRSession, class_name: str) -> str:
    payload = QRPayload(
        sessionId=session.id,
        sessionCode=session.session_code,
        classId=session.class_id,
        className=class_name
    )
    return json.dumps(payload.model_dump())


def to_session_response(session: QRSession, now: datetime, qr_code_data_url: str = None,
                        message: str = None) -> QRSessionResponse:
    left = remaining_ms(session.expires_at, now) if session.is_active else 0
    return QRSessionResponse(
        id=session.id,
        class_id=session.class_id,
        class_name=session.classroom.name,
        session_code=session.session_code,
        expires_at=session.expires_at,
        is_active=session.is_active,
        remaining_ms=left,
        time_left=format_time_left(left),
        qr_code_data_url=qr_code_data_url,
        message=message
    )


def generate_session(db: Session, teacher_id: str, class_id: str, now: datetime = None) -> QRSessionResponse:
    """
    QR 출석 세션 생성
    - 해당 반의 기존 활성 세션을 모두 비활성화
    - 랜덤 코드와 만료 시각(기본 10분)을 가진 새 세션 생성
    - {sessionId, sessionCode, classId, className} JSON을 QR 이미지로 인코딩
    """
    classroom = get_class_for_teacher(db, teacher_id, class_id)
    now = now or datetime.utcnow()

    try:
        db.query(QRSession).filter(
            QRSession.class_id == class_id,
            QRSession.is_active == True
        ).update({"is_active": False})

        session = QRSession(
            class_id=class_id,
            teacher_id=teacher_id,
            session_code=new_session_code(),
            expires_at=now + timedelta(minutes=settings.QR_SESSION_TTL_MINUTES),
            is_active=True
        )
        db.add(session)
        db.commit()
        db.refresh(session)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error generating QR session for class %s", class_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to generate QR session")

    qr_code_data_url = render_qr_data_url(build_qr_payload(session, classroom.name))
    logger.info(f"QR session started - class: {class_id}, session: {session.id}, expires_at: {session.expires_at}")
    return to_session_response(session, now, qr_code_data_url, "QR session started successfully!")


def get_qr_session_for_teacher(db: Session, teacher_id: str, session_id: str) -> QRSession:
    session = db.query(QRSession).filter(QRSession.id == session_id, QRSession.teacher_id == teacher_id).first()
    if not session:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="QR session not found")
    return session


def expire_session(db: Session, session: QRSession) -> None:
    try:
        session.is_active = False
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error ending QR session %s", session.id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to end session")
    logger.info(f"QR session ended: {session.id}")


def end_session(db: Session, teacher_id: str, session_id: str, now: datetime = None) -> QRSessionResponse:
    session = get_qr_session_for_teacher(db, teacher_id, session_id)
    if session.is_active:
        expire_session(db, session)
    return to_session_response(session, now or datetime.utcnow(), message="QR session ended")


def get_session_status(db: Session, teacher_id: str, session_id: str, now: datetime = None) -> QRSessionResponse:
    """ 남은 시간을 벽시계 기준으로 다시 계산하고, 0이 됐는데 아직 활성이면 종료한다. """
    session = get_qr_session_for_teacher(db, teacher_id, session_id)
    now = now or datetime.utcnow()
    if session.is_active and remaining_ms(session.expires_at, now) == 0:
        expire_session(db, session)
    return to_session_response(session, now)


def get_active_session(db: Session, teacher_id: str, class_id: str, now: datetime = None) -> Optional[QRSessionResponse]:
    """ 화면을 새로고침해도 진행 중인 세션의 QR을 다시 보여줄 수 있도록 현재 활성 세션을 반환 """
    classroom = get_class_for_teacher(db, teacher_id, class_id)
    now = now or datetime.utcnow()
    session = (
        db.query(QRSession)
        .filter(QRSession.class_id == class_id, QRSession.is_active == True)
        .order_by(QRSession.created_at.desc())
        .first()
    )
    if not session:
        return None
    if remaining_ms(session.expires_at, now) == 0:
        expire_session(db, session)
        return None
    qr_code_data_url = render_qr_data_url(build_qr_payload(session, classroom.name))
    return to_session_response(session, now, qr_code_data_url)
