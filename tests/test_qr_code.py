import base64

from classroll.utils.qr_code import QRFrameScanner, render_qr_data_url


def test_render_produces_png_data_url():
    data_url = render_qr_data_url("hello")
    assert data_url.startswith("data:image/png;base64,")
    png = base64.b64decode(data_url.split(",", 1)[1])
    assert png[:8] == b"\x89PNG\r\n\x1a\n"


def test_decode_rendered_code():
    scanner = QRFrameScanner()
    text = '{"sessionId": "s-1", "sessionCode": "abc123", "classId": "c-1", "className": "Math"}'
    assert scanner.decode_data_url(render_qr_data_url(text)) == text


def test_decode_bad_input():
    scanner = QRFrameScanner()
    assert scanner.decode(b"not an image") is None
    assert scanner.decode_data_url("data:image/png;base64,@@@@") is None
