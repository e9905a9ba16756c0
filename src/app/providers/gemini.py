"""
Google Gemini Provider (google-genai SDK).

- 호출 1회 (client.aio, 재시도/스트리밍 없음)
- SDK/네트워크 예외 → ProviderError (원인은 __cause__로 보존)
- 응답은 첫 번째 후보의 파트만 사용, thought 파트는 제외
"""

import base64
import logging
import os
from typing import Any

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from src.domain.schemas import (
    ContentPart,
    InlineImagePart,
    ModelPlan,
    ReplyPart,
    TextPart,
)

from .base import GenerationProvider, ProviderError

logger = logging.getLogger(__name__)


class GeminiProvider(GenerationProvider):
    """
    Gemini Provider.

    Usage:
        provider = GeminiProvider(api_key="...")
        reply = await provider.generate(plan, parts)
    """

    def __init__(
        self,
        api_key: str | None = None,
        client: genai.Client | None = None,
    ):
        """
        Args:
            api_key: API 키 (없으면 환경변수 GOOGLE_API_KEY)
            client: 테스트용 클라이언트 주입
        """
        self.api_key = api_key or os.environ.get("GOOGLE_API_KEY")
        self._client = client

    def _get_client(self) -> genai.Client:
        """Gemini 클라이언트 (lazy init)."""
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def generate(
        self,
        plan: ModelPlan,
        parts: list[ContentPart],
    ) -> list[ReplyPart]:
        client = self._get_client()
        contents = [types.Content(role="user", parts=self.build_parts(parts))]
        config = self.build_config(plan)

        try:
            response = await client.aio.models.generate_content(
                model=plan.model,
                contents=contents,
                config=config,
            )
        except genai_errors.APIError as e:
            logger.error(
                f"Gemini API error (model={plan.model}, code={e.code}): {e}",
                exc_info=True,
            )
            raise ProviderError(
                "generation failed",
                model=plan.model,
                status=e.code,
            ) from e
        except Exception as e:
            logger.error(
                f"Gemini call failed with unexpected error (model={plan.model}): {e}",
                exc_info=True,
            )
            raise ProviderError("generation failed", model=plan.model) from e

        return self.normalize_reply(response)

    def build_config(self, plan: ModelPlan) -> types.GenerateContentConfig | None:
        """ModelPlan → SDK 설정. 텍스트 전용이면 None."""
        kwargs: dict[str, Any] = {}

        if plan.response_modalities:
            kwargs["response_modalities"] = [
                m.upper() for m in plan.response_modalities
            ]
        if plan.image_size:
            kwargs["image_config"] = types.ImageConfig(image_size=plan.image_size)

        if not kwargs:
            return None
        return types.GenerateContentConfig(**kwargs)

    def build_parts(self, parts: list[ContentPart]) -> list[types.Part]:
        """도메인 파트 → SDK 파트."""
        sdk_parts: list[types.Part] = []
        for part in parts:
            if isinstance(part, TextPart):
                sdk_parts.append(types.Part(text=part.text))
            elif isinstance(part, InlineImagePart):
                # SDK가 전송 시 base64로 다시 인코딩하므로 바이트로 전달
                sdk_parts.append(
                    types.Part(
                        inline_data=types.Blob(
                            mime_type=part.mime_type,
                            data=base64.b64decode(part.base64_data),
                        )
                    )
                )
        return sdk_parts

    def normalize_reply(self, response: Any) -> list[ReplyPart]:
        """SDK 응답 → ReplyPart 목록 (첫 번째 후보만)."""
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return []

        content = candidates[0].content
        raw_parts = (content.parts if content else None) or []

        reply: list[ReplyPart] = []
        for part in raw_parts:
            if getattr(part, "thought", False):
                continue
            blob = part.inline_data
            reply.append(
                ReplyPart(
                    text=part.text,
                    data=blob.data if blob else None,
                    mime_type=blob.mime_type if blob else None,
                )
            )
        return reply
