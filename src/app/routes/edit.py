"""
Edit Route: 프롬프트 + 이미지 → 편집된 이미지.

POST /edit (multipart)
- prompt: 텍스트
- images: 파일 0..N개 (image/*)
- mode: "pro"면 고품질 variant

처리 순서:
1. 업로드 수신 (개수/크기/타입 제한)
2. 프롬프트 확인 → 이미지 유무 확인 → 파트 조립
3. 원격 호출 1회
4. 응답 해석 (이미지 없으면 502 + fallback 텍스트)
업로드 임시 파일은 with 블록 종료 시 항상 삭제.
"""

import logging

from fastapi import APIRouter, File, Form, Request, UploadFile
from fastapi.responses import Response

from src.app.services.assembler import build_edit_parts
from src.app.services.dispatch import ModelDispatcher
from src.app.services.extract import extract_generation_result
from src.core.prompts import sanitize_prompt
from src.core.uploads import TransientUploadStore
from src.domain import constants as C
from src.domain.errors import ErrorCodes, GatewayError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/edit")
async def edit_image(
    request: Request,
    prompt: str | None = Form(None),
    mode: str | None = Form(None),
    images: list[UploadFile] | None = File(None),
) -> Response:
    """
    이미지 편집.

    Returns:
        200 이미지 바이너리 (content-type = 이미지 mime, cache-control: no-store)
    """
    store: TransientUploadStore = request.app.state.upload_store
    dispatcher: ModelDispatcher = request.app.state.dispatcher
    max_chars: int = request.app.state.prompt_max_chars

    with store.open_session() as session:
        files = await session.accept_all(images or [])

        clean_prompt = sanitize_prompt(prompt, max_chars)
        if not clean_prompt:
            raise GatewayError(ErrorCodes.PROMPT_REQUIRED, C.MSG_PROMPT_REQUIRED)

        if not files:
            raise GatewayError(ErrorCodes.NO_IMAGES_UPLOADED, C.MSG_NO_IMAGES)

        parts = build_edit_parts(clean_prompt, files)
        plan = dispatcher.plan_edit(mode)
        reply = await dispatcher.run(plan, parts)

    result = extract_generation_result(reply)

    if not result.has_image:
        raise GatewayError(
            ErrorCodes.NO_IMAGE_RETURNED,
            result.text or C.MSG_NO_IMAGE_RETURNED,
            model=plan.model,
        )

    logger.info(
        f"Edit succeeded (variant={plan.selection.value}, images={len(parts) - 1}, "
        f"mime={result.mime_type}, bytes={len(result.image_bytes or b'')})"
    )

    return Response(
        content=result.image_bytes,
        media_type=result.mime_type,
        headers={
            "cache-control": "no-store",
            "x-model-variant": plan.selection.value,
        },
    )
