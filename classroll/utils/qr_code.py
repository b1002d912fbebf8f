import io
import base64
import binascii
import logging
from typing import Optional

import cv2
import numpy as np
import qrcode
from qrcode.constants import ERROR_CORRECT_M

from classroll.core.config import settings

logger = logging.getLogger(__name__)

# 디코딩 전에 프레임 둘레에 붙이는 흰 여백(px)
QUIET_ZONE_PX = 32
# 이보다 작은 프레임은 2배로 키워서 디코딩
MIN_DECODE_SIDE_PX = 400


def render_qr_data_url(data: str, width: int = None, margin: int = None) -> str:
    """
    문자열을 QR 코드 PNG로 만들어 data URL(data:image/png;base64,...)로 반환한다.
    모듈 크기는 전체 이미지 폭이 width에 가깝도록 정수 배율로 맞춘다.
    """
    width = width or settings.QR_CODE_WIDTH
    margin = settings.QR_CODE_MARGIN if margin is None else margin

    qr = qrcode.QRCode(error_correction=ERROR_CORRECT_M, box_size=1, border=margin)
    qr.add_data(data)
    qr.make(fit=True)
    qr.box_size = max(1, width // (qr.modules_count + 2 * margin))

    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    encoded = base64.b64encode(buf.getvalue()).decode("utf-8")
    return f"data:image/png;base64,{encoded}"


class QRFrameScanner:
    """
    카메라 프레임(이미지 바이트 또는 base64 스냅샷)에서 QR 코드 텍스트를 읽는다.
    """

    def __init__(self):
        self._detector = cv2.QRCodeDetector()

    def decode(self, image_bytes: bytes) -> Optional[str]:
        if not image_bytes:
            return None
        nparr = np.frombuffer(image_bytes, np.uint8)
        img = cv2.imdecode(nparr, cv2.IMREAD_COLOR)
        if img is None:
            logger.debug("Frame could not be decoded as an image")
            return None

        if min(img.shape[:2]) < MIN_DECODE_SIDE_PX:
            img = cv2.resize(img, None, fx=2, fy=2, interpolation=cv2.INTER_NEAREST)
        img = cv2.copyMakeBorder(
            img, QUIET_ZONE_PX, QUIET_ZONE_PX, QUIET_ZONE_PX, QUIET_ZONE_PX,
            cv2.BORDER_CONSTANT, value=(255, 255, 255)
        )

        text, points, _ = self._detector.detectAndDecode(img)
        if not text:
            return None
        return text

    def decode_data_url(self, b64data: str) -> Optional[str]:
        """ b64data는 'data:image/png;base64,...' 형식 또는 순수 base64 문자열 """
        if ',' in b64data:
            b64data = b64data.split(',', 1)[1]
        try:
            data = base64.b64decode(b64data, validate=True)
        except (binascii.Error, ValueError):
            return None
        return self.decode(data)
