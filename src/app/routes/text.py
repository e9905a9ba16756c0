"""
Text Route: 프롬프트 → 텍스트.

POST /text (JSON) {"prompt": "..."} → {"text": "..."}
"""

import logging
from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel

from src.app.services.dispatch import ModelDispatcher
from src.core.prompts import sanitize_prompt
from src.domain import constants as C
from src.domain.errors import ErrorCodes, GatewayError

logger = logging.getLogger(__name__)

router = APIRouter()


class TextRequest(BaseModel):
    """요청 본문. prompt 타입 검사는 sanitize_prompt에 맡긴다."""
    prompt: Any = None


@router.post("/text")
async def generate_text(request: Request, body: TextRequest) -> dict[str, str]:
    """텍스트 생성."""
    dispatcher: ModelDispatcher = request.app.state.dispatcher
    max_chars: int = request.app.state.prompt_max_chars

    clean_prompt = sanitize_prompt(body.prompt, max_chars)
    if not clean_prompt:
        raise GatewayError(ErrorCodes.PROMPT_REQUIRED, C.MSG_PROMPT_REQUIRED)

    text = await dispatcher.generate_text(clean_prompt)
    logger.info(f"Text generation succeeded (chars={len(text)})")

    return {"text": text}
