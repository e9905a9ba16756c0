"""
FastAPI 애플리케이션 진입점.

실행:
- 개발: uv run uvicorn src.app.main:app --reload
- 프로덕션: uv run python -m src.app.main  (GOOGLE_API_KEY 필수)
"""

import logging
import os
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from src.app.providers.base import GenerationProvider
from src.app.providers.gemini import GeminiProvider
from src.app.routes import edit, text
from src.app.services.dispatch import ModelDispatcher
from src.core.config import (
    ModelCatalog,
    RateLimitPolicy,
    UploadLimits,
    load_config,
    prompt_max_chars,
    require_api_key,
    resolve_host,
    resolve_port,
)
from src.core.ratelimit import RateGovernor
from src.core.uploads import TransientUploadStore
from src.domain import constants as C
from src.domain.errors import ConfigError, ErrorCodes, GatewayError

logger = logging.getLogger(__name__)

# =============================================================================
# Error → HTTP Status (여기서만 변환)
# =============================================================================

STATUS_BY_CODE: dict[str, int] = {
    ErrorCodes.PROMPT_REQUIRED: 400,
    ErrorCodes.NO_IMAGES_UPLOADED: 400,
    ErrorCodes.INVALID_IMAGE_PAYLOAD: 400,
    ErrorCodes.INVALID_REQUEST_BODY: 400,
    ErrorCodes.UNEXPECTED_FILE_TYPE: 400,
    ErrorCodes.TOO_MANY_FILES: 413,
    ErrorCodes.FILE_TOO_LARGE: 413,
    ErrorCodes.RATE_LIMITED: 429,
    ErrorCodes.NO_IMAGE_RETURNED: 502,
    ErrorCodes.GENERATION_FAILED: 500,
}

# route class별 rate limit 대상 경로
ROUTE_CLASS_BY_PATH: dict[str, str] = {
    "/edit": C.ROUTE_CLASS_EDIT,
    "/text": C.ROUTE_CLASS_TEXT,
}


def wants_json(request: Request) -> bool:
    """JSON으로 요청한 클라이언트에는 JSON 에러 본문."""
    content_type = request.headers.get("content-type", "")
    accept = request.headers.get("accept", "")
    return "application/json" in content_type or "application/json" in accept


def error_response(
    request: Request,
    status_code: int,
    message: str,
    code: str,
    headers: dict[str, str] | None = None,
) -> Response:
    """에러 응답 (요청 형식에 맞춰 JSON 또는 text/plain)."""
    if wants_json(request):
        return JSONResponse(
            {"error": message, "code": code},
            status_code=status_code,
            headers=headers,
        )
    return PlainTextResponse(message, status_code=status_code, headers=headers)


# =============================================================================
# Exception Handlers
# =============================================================================


async def handle_gateway_error(request: Request, exc: GatewayError) -> Response:
    """GatewayError → status 매핑. 5xx(502 제외)는 메시지 숨김."""
    status_code = STATUS_BY_CODE.get(exc.code, 500)
    message = exc.message

    if status_code == 502:
        logger.warning(f"Upstream returned no image: {exc.context}")
    elif status_code >= 500:
        logger.error(f"Request failed: {exc}", exc_info=exc.__cause__ or exc)
        message = C.MSG_INTERNAL_ERROR
    else:
        logger.info(f"Rejected {request.method} {request.url.path}: {exc}")

    return error_response(request, status_code, message, exc.code)


async def handle_validation_error(request: Request, exc: Exception) -> Response:
    """FastAPI 422 대신 400."""
    logger.info(f"Invalid request body on {request.url.path}: {exc}")
    return error_response(
        request, 400, C.MSG_INVALID_BODY, ErrorCodes.INVALID_REQUEST_BODY
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> Response:
    """
    예상 못한 예외 → 500 (스택/메시지 노출 금지).

    라우트 예외는 rate_limit 미들웨어가 직접 호출.
    미들웨어 자체의 예외만 exception handler 경로로 들어온다.
    """
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    return error_response(request, 500, C.MSG_INTERNAL_ERROR, "INTERNAL_ERROR")


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    애플리케이션 생명주기 관리.

    시작 시: API 키 확인 (주입된 provider가 없을 때), 업로드 디렉터리 준비
    """
    # Startup
    if app.state.requires_api_key:
        require_api_key()

    app.state.upload_store.prepare()
    logger.info(
        f"Gateway ready (models={app.state.dispatcher.catalog}, "
        f"upload_dir={app.state.upload_store.upload_dir})"
    )

    yield


# =============================================================================
# App Factory
# =============================================================================


def create_app(
    config: dict[str, Any] | None = None,
    provider: GenerationProvider | None = None,
    governor: RateGovernor | None = None,
) -> FastAPI:
    """
    앱 생성.

    Args:
        config: 설정 dict (None이면 default.yaml)
        provider: 원격 모델 provider (None이면 GeminiProvider, 기동 시 키 검사)
        governor: rate limiter (None이면 config의 정책으로 생성)
    """
    if config is None:
        config = load_config()

    app = FastAPI(
        title="Image Edit Gateway",
        description="프롬프트 + 이미지 → 생성형 모델 → 이미지/텍스트",
        version="0.1.0",
        lifespan=lifespan,
    )

    upload_store = TransientUploadStore(UploadLimits.from_config(config))

    app.state.config = config
    app.state.requires_api_key = provider is None
    app.state.upload_store = upload_store
    app.state.prompt_max_chars = prompt_max_chars(config)
    app.state.dispatcher = ModelDispatcher(
        provider or GeminiProvider(),
        ModelCatalog.from_config(config),
    )
    app.state.governor = governor or RateGovernor(RateLimitPolicy.from_config(config))

    app.add_exception_handler(GatewayError, handle_gateway_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    @app.middleware("http")
    async def rate_limit(request: Request, call_next: Any) -> Response:
        """global → route class 순서로 차감."""
        rate_governor: RateGovernor = request.app.state.governor
        client_id = request.client.host if request.client else "unknown"

        decision = rate_governor.check(client_id, C.ROUTE_CLASS_GLOBAL)
        route_class = ROUTE_CLASS_BY_PATH.get(request.url.path)
        if decision.allowed and route_class:
            decision = rate_governor.check(client_id, route_class)

        if not decision.allowed:
            logger.info(
                f"Rate limited {client_id} on {request.url.path} "
                f"(limit={decision.limit}, reset={decision.reset_after}s)"
            )
            return error_response(
                request,
                429,
                C.MSG_RATE_LIMITED,
                ErrorCodes.RATE_LIMITED,
                headers=decision.headers(),
            )

        # 여기서 잡지 않으면 ServerErrorMiddleware가 응답 후 재-raise (중복 로그, 헤더 누락)
        try:
            response: Response = await call_next(request)
        except Exception as exc:
            response = await handle_unexpected_error(request, exc)
        response.headers.update(decision.headers())
        return response

    app.include_router(edit.router, tags=["Edit"])
    app.include_router(text.router, tags=["Text"])

    @app.get("/healthz")
    async def healthz() -> dict[str, bool]:
        """헬스 체크."""
        return {"ok": True}

    return app


app = create_app()


# =============================================================================
# CLI Entry Point
# =============================================================================


def main() -> None:
    """서버 실행. GOOGLE_API_KEY 없으면 즉시 종료 (exit 1)."""
    import uvicorn
    from dotenv import load_dotenv

    load_dotenv()

    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config()
    try:
        require_api_key()
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(1)

    host = resolve_host(config)
    port = resolve_port(config)
    logger.info(f"server running on port {port}")

    uvicorn.run(create_app(config), host=host, port=port, log_level=log_level.lower())


if __name__ == "__main__":
    main()
