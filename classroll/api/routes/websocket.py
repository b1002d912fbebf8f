# /ws/qr-sessions/{session_id}/countdown
import asyncio
import logging
from fastapi import APIRouter, WebSocket, WebSocketDisconnect, Depends, Query, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from classroll.core.config import settings
from classroll.dependencies.db import get_db
from classroll.dependencies.auth import decode_access_token
from classroll.models.qr_session import QRSession
from classroll.services.countdown import SessionCountdown, format_time_left
from classroll.services.qr_session_service import expire_session

logger = logging.getLogger(__name__)

websocket_router = APIRouter()


def _load_session(db: Session, session_id: str, teacher_id: str):
    return db.query(QRSession).filter(
        QRSession.id == session_id,
        QRSession.teacher_id == teacher_id
    ).first()


def _tick(db: Session, session: QRSession, countdown: SessionCountdown) -> tuple[int, bool]:
    """ 세션을 다시 읽고 카운트다운을 한 칸 진행한다. 0이 되면 tick 안에서 세션 종료(DB 커밋)까지 수행 """
    # 교사가 다른 화면에서 종료했을 수도 있으므로 매번 다시 읽는다
    db.refresh(session)
    if not session.is_active:
        countdown.deactivate()

    remaining = countdown.tick()
    is_active = session.is_active
    return (remaining if is_active else 0), is_active


@websocket_router.websocket("/ws/qr-sessions/{session_id}/countdown")
async def websocket_countdown(
    websocket: WebSocket,
    session_id: str,
    token: str = Query(...),
    db: Session = Depends(get_db)
):
    """
    QR 세션의 남은 시간을 1초마다 전송합니다.
    0이 되면 세션을 자동 종료하고 마지막 프레임을 보낸 뒤 연결을 닫습니다.
    클라이언트가 연결을 끊으면 타이머도 함께 멈춥니다.
    """
    await websocket.accept()

    try:
        payload = decode_access_token(token)
    except HTTPException:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    if payload.get("role") != "teacher":
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    session = await run_in_threadpool(_load_session, db, session_id, payload["sub"])
    if not session:
        await websocket.send_json({"error": "QR session not found"})
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    countdown = SessionCountdown(
        session.expires_at,
        on_expire=lambda: expire_session(db, session),
        is_active=session.is_active
    )
    logger.info(f"Countdown started for session {session_id}")

    try:
        while not countdown.stopped:
            remaining, is_active = await run_in_threadpool(_tick, db, session, countdown)
            await websocket.send_json({
                "session_id": session_id,
                "remaining_ms": remaining,
                "display": format_time_left(remaining),
                "is_active": is_active,
            })
            if not countdown.is_active:
                break
            await asyncio.sleep(settings.COUNTDOWN_INTERVAL_SECONDS)
    except WebSocketDisconnect:
        logger.info(f"🔌 countdown disconnect [{session_id}]")
        return
    except HTTPException as e:
        logger.error(f"Countdown aborted for session {session_id}: {e.detail}")
        await websocket.send_json({"error": e.detail})
        await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
        return
    finally:
        countdown.stop()

    await websocket.close()
