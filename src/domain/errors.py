"""
Error definitions for the gateway.

규칙:
- 클라이언트 입력 오류 → 원격 호출 전에 즉시 중단 (GatewayError)
- 에러는 code로 태깅, HTTP status 변환은 최외곽(app.main)에서만
- 5xx 응답 본문에 내부 예외 메시지 노출 금지
"""

from typing import Any


class GatewayError(Exception):
    """
    요청 처리 중 계층 경계를 넘어가는 태깅된 에러.

    Usage:
        raise GatewayError(ErrorCodes.PROMPT_REQUIRED, "prompt is required")
        raise GatewayError(ErrorCodes.FILE_TOO_LARGE, "file too large",
                           filename="a.jpg", limit=10485760)

    message는 클라이언트에 그대로 노출되는 문구,
    context는 로그 전용 부가 정보.
    """

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        base = f"[{self.code}] {self.message}"
        return f"{base} ({ctx_str})" if ctx_str else base


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수. status 매핑은 app.main.STATUS_BY_CODE 참조."""

    # === Prompt ===
    PROMPT_REQUIRED = "PROMPT_REQUIRED"

    # === Upload Intake ===
    TOO_MANY_FILES = "TOO_MANY_FILES"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    UNEXPECTED_FILE_TYPE = "UNEXPECTED_FILE_TYPE"

    # === Request Assembly ===
    NO_IMAGES_UPLOADED = "NO_IMAGES_UPLOADED"
    INVALID_IMAGE_PAYLOAD = "INVALID_IMAGE_PAYLOAD"
    INVALID_REQUEST_BODY = "INVALID_REQUEST_BODY"

    # === Remote Model ===
    NO_IMAGE_RETURNED = "NO_IMAGE_RETURNED"  # upstream refusal, not a crash
    GENERATION_FAILED = "GENERATION_FAILED"

    # === Rate Governor ===
    RATE_LIMITED = "RATE_LIMITED"


# =============================================================================
# Startup
# =============================================================================

class ConfigError(Exception):
    """필수 설정 누락. 프로세스 기동 단계에서만 발생 (요청 처리 중에는 없음)."""
    pass
