from fastapi import APIRouter, Depends, Body, UploadFile, File
from sqlalchemy.orm import Session

from classroll.dependencies.db import get_db
from classroll.dependencies.auth import get_current_student
from classroll.models.user import User
from classroll.schemas.dashboard import StudentDashboardResponse
from classroll.schemas.scan import ScanRequest, StudentScanResponse
from classroll.services.dashboard_service import get_student_dashboard
from classroll.services.scan_service import handle_student_scan
from classroll.api.routes.scan import read_qr_frame, read_scan_request

router = APIRouter()


@router.get("", response_model=StudentDashboardResponse, summary="학생 대시보드")
def get_my_dashboard(
    db: Session = Depends(get_db),
    student: User = Depends(get_current_student)
):
    """
    내 명단 정보, 소속 반, 최근 출석 기록 10건과 출석률을 반환합니다.
    """
    return get_student_dashboard(db, student)


@router.post("/scan", response_model=StudentScanResponse, summary="QR 스캔으로 출석")
def scan_for_attendance(
    req: ScanRequest = Body(...),
    db: Session = Depends(get_db),
    student: User = Depends(get_current_student)
):
    """
    QR 코드를 검증하고, 해당 반 명단에 있으면 오늘 날짜로 출석(present) 처리합니다.
    """
    return handle_student_scan(db, student, read_scan_request(req))


@router.post("/scan/image", response_model=StudentScanResponse, summary="QR 이미지 스캔으로 출석")
def scan_image_for_attendance(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    student: User = Depends(get_current_student)
):
    return handle_student_scan(db, student, read_qr_frame(file))
