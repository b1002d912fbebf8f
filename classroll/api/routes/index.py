from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import RedirectResponse
from starlette.routing import Match

router = APIRouter()

catch_all_router = APIRouter()


@router.get("/", summary="서비스 정보")
def index():
    return {
        "name": "classroll",
        "description": "Classroom attendance with QR code sessions",
        "routes": {
            "auth": "/api/v1/auth",
            "student_auth": "/api/v1/student-auth",
            "demo": "/api/v1/demo",
            "student_dashboard": "/api/v1/student-dashboard",
            "classes": "/api/v1/classes",
            "students": "/api/v1/students",
            "attendance": "/api/v1/attendance",
            "qr_sessions": "/api/v1/qr-sessions",
            "scan": "/api/v1/scan",
        },
    }


def _match_other_routes(request: Request, path: str) -> tuple[bool, set]:
    """ catch-all을 제외한 라우트 중 path와 일치하는 것이 있는지, 허용 메서드는 무엇인지 """
    scope = {**request.scope, "path": path}
    full_match = False
    allowed = set()
    for route in request.app.router.routes:
        if getattr(route, "endpoint", None) is not_found:
            continue
        match, _ = route.matches(scope)
        if match == Match.FULL:
            full_match = True
        elif match == Match.PARTIAL:
            allowed.update(getattr(route, "methods", None) or ())
    return full_match, allowed


# 다른 모든 라우터보다 마지막에 등록해야 한다
@catch_all_router.api_route(
    "/{full_path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False
)
def not_found(full_path: str, request: Request):
    path = request.url.path

    # 끝의 '/'만 다른 경로는 정식 경로로 보낸다
    if path != "/" and path.endswith("/"):
        stripped = path.rstrip("/")
        full_match, allowed = _match_other_routes(request, stripped)
        if full_match or allowed:
            return RedirectResponse(url=str(request.url.replace(path=stripped)), status_code=307)

    # 경로는 있는데 메서드만 다른 경우
    _, allowed = _match_other_routes(request, path)
    if allowed:
        raise HTTPException(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            detail="Method Not Allowed",
            headers={"Allow": ", ".join(sorted(allowed))},
        )

    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Not Found: {path}")
