from fastapi import APIRouter, Depends, Body, UploadFile, File, HTTPException
from sqlalchemy.orm import Session

from classroll.dependencies.db import get_db
from classroll.schemas.scan import ScanRequest, ScanResponse
from classroll.services.scan_service import handle_scan_result
from classroll.utils.qr_code import QRFrameScanner

router = APIRouter()

frame_scanner = QRFrameScanner()

NO_QR_FOUND = "No QR code found in image"


def read_qr_frame(file: UploadFile) -> str:
    if file.content_type and not file.content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image files can be uploaded")
    raw_text = frame_scanner.decode(file.file.read())
    if raw_text is None:
        raise HTTPException(status_code=400, detail=NO_QR_FOUND)
    return raw_text


def read_scan_request(req: ScanRequest) -> str:
    """ QR 텍스트가 있으면 그대로, 없으면 스냅샷(data URL)에서 QR을 읽는다 """
    if req.raw_text:
        return req.raw_text
    raw_text = frame_scanner.decode_data_url(req.image)
    if raw_text is None:
        raise HTTPException(status_code=400, detail=NO_QR_FOUND)
    return raw_text


@router.post("", response_model=ScanResponse, summary="QR 코드 검증")
def verify_scanned_code(
    req: ScanRequest = Body(...),
    db: Session = Depends(get_db)
):
    """
    카메라에서 읽은 QR 텍스트(raw_text) 또는 프레임 스냅샷(image, data URL)을 검증합니다.
    - JSON이 아니면 400
    - 세션이 없거나 종료됐으면 404
    - 만료 시각이 지났으면 410
    """
    return handle_scan_result(db, read_scan_request(req))


@router.post("/image", response_model=ScanResponse, summary="QR 이미지 검증")
def verify_scanned_image(
    file: UploadFile = File(...),
    db: Session = Depends(get_db)
):
    """
    카메라 프레임 이미지에서 QR 코드를 읽은 뒤 같은 방식으로 검증합니다.
    """
    return handle_scan_result(db, read_qr_frame(file))
