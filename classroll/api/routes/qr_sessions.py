from typing import Optional
from fastapi import APIRouter, Depends, Body, Query
from sqlalchemy.orm import Session

from classroll.dependencies.db import get_db
from classroll.dependencies.auth import get_current_teacher_id, get_current_teacher
from classroll.schemas.qr_session import QRSessionCreateRequest, QRSessionResponse
from classroll.services.qr_session_service import generate_session, end_session, get_session_status, get_active_session

router = APIRouter(
    dependencies=[Depends(get_current_teacher)]
)


@router.post("", response_model=QRSessionResponse, summary="QR 출석 세션 시작")
def start_qr_session(
    req: QRSessionCreateRequest = Body(...),
    db: Session = Depends(get_db),
    teacher_id: str = Depends(get_current_teacher_id)
):
    """
    반의 기존 활성 세션을 종료하고 새 세션(기본 10분)을 만든 뒤 QR 이미지(data URL)를 반환합니다.
    """
    return generate_session(db, teacher_id, req.class_id)


@router.get("/active", response_model=Optional[QRSessionResponse], summary="반의 진행 중인 세션 조회")
def get_active_qr_session(
    class_id: str = Query(...),
    db: Session = Depends(get_db),
    teacher_id: str = Depends(get_current_teacher_id)
):
    return get_active_session(db, teacher_id, class_id)


@router.get("/{session_id}", response_model=QRSessionResponse, summary="세션 남은 시간 조회")
def get_qr_session_status(
    session_id: str,
    db: Session = Depends(get_db),
    teacher_id: str = Depends(get_current_teacher_id)
):
    """
    남은 시간을 다시 계산합니다. 만료됐는데 아직 활성 상태면 자동으로 종료합니다.
    """
    return get_session_status(db, teacher_id, session_id)


@router.post("/{session_id}/end", response_model=QRSessionResponse, summary="QR 세션 종료")
def end_qr_session(
    session_id: str,
    db: Session = Depends(get_db),
    teacher_id: str = Depends(get_current_teacher_id)
):
    return end_session(db, teacher_id, session_id)
