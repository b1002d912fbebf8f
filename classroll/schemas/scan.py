import datetime
from typing import Optional
from pydantic import BaseModel, model_validator


class ScanRequest(BaseModel):
    # 카메라가 읽은 QR 텍스트 또는 프레임 스냅샷(data:image/...;base64,...) 중 하나
    raw_text: Optional[str] = None
    image: Optional[str] = None

    @model_validator(mode="after")
    def text_or_image(self):
        if not self.raw_text and not self.image:
            raise ValueError("Either raw_text or image is required")
        return self


class ScanResponse(BaseModel):
    session_id: str
    class_id: str
    class_name: str
    message: str


class StudentScanResponse(ScanResponse):
    student_id: str
    date: datetime.date
    status: str
