from datetime import datetime
from pydantic import BaseModel


class QRSessionCreateRequest(BaseModel):
    class_id: str


class QRPayload(BaseModel):
    """ QR 이미지에 담기는 JSON. 버전 필드가 없으므로 필드명을 바꾸면 기존 코드와 호환되지 않는다. """
    sessionId: str
    sessionCode: str
    classId: str
    className: str


class QRSessionResponse(BaseModel):
    id: str
    class_id: str
    class_name: str
    session_code: str
    expires_at: datetime
    is_active: bool
    remaining_ms: int
    time_left: str  # 'm:ss'
    qr_code_data_url: str | None = None
    message: str | None = None
