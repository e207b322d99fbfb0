"""
errors.py

API 에러 응답 envelope 정의 및 정책 판단 결과(Decision) -> HTTP 에러 변환.

모든 에러 응답은 아래 형태로 통일한다.

    { "error": "<사람이 읽는 메시지>", "code": "<ErrorCode>" }

요청 검증 실패(422 대신 400)는 details 필드를 추가로 포함한다.

관련 파일:
- fithub.services.roles    : Decision / DenyReason 생성
- fithub.main              : exception handler 등록

"""


from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fithub.models.enums import DenyReason, ErrorCode
from fithub.schemas.policy import Decision



class FithubError(Exception):
    def __init__(self, status_code: int, message: str, code: ErrorCode = ErrorCode.INTERNAL_SERVER_ERROR):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.code = code


# 거부 사유별 (상태 코드, 메시지)
DENY_RESPONSES: dict[DenyReason, tuple[int, str]] = {
    DenyReason.NOT_PRIVILEGED: (403, "Admin privileges required"),
    DenyReason.TARGET_PROTECTED: (403, "Only super-admins can manage admin accounts"),
    DenyReason.ROLE_ESCALATION: (403, "Only super-admins can grant or revoke admin roles"),
    DenyReason.SUPER_ADMIN_IMMUTABLE: (403, "The SUPER_ADMIN role cannot be granted or revoked"),
    DenyReason.SELF_LOCKOUT: (400, "Cannot remove your own admin privileges"),
    DenyReason.SELF_BLOCK: (400, "Cannot block your own account"),
    DenyReason.SUPER_ADMIN_UNBLOCKABLE: (403, "Super-admin accounts cannot be blocked"),
}


def raise_for_decision(decision: Decision) -> None:
    if decision.allowed:
        return
    status_code, message = DENY_RESPONSES[decision.reason]
    raise FithubError(status_code, message, ErrorCode.FORBIDDEN)


def error_body(message: str, code: ErrorCode) -> dict:
    return {"error": message, "code": code.value}


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(FithubError)
    async def _fithub_error(request: Request, exc: FithubError):
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.code))

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        body = error_body("Validation Error", ErrorCode.VALIDATION_ERROR)
        body["details"] = [
            {
                "path": ".".join(str(part) for part in err["loc"][1:]),
                "message": err["msg"],
                "code": ErrorCode.VALIDATION_ERROR.value,
            }
            for err in exc.errors()
        ]
        return JSONResponse(status_code=400, content=body)
