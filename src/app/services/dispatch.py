"""
Model Dispatcher: mode 값 → variant 선택 → 원격 호출.

- mode == "pro" (정확히 일치) → EDIT_PRO (+ 출력 크기 힌트)
- 그 외/없음 → EDIT_NORMAL
- 텍스트 전용 흐름 → TEXT (이미지 설정 없음)
"""

import logging
from typing import Any

from src.app.providers.base import GenerationProvider
from src.core.config import ModelCatalog
from src.domain import constants as C
from src.domain.schemas import ContentPart, ModelPlan, ModelSelection, ReplyPart, TextPart

from .extract import extract_text

logger = logging.getLogger(__name__)


def select_model(mode: Any) -> ModelSelection:
    """mode 플래그 → 편집 variant."""
    if mode == C.MODE_PRO:
        return ModelSelection.EDIT_PRO
    return ModelSelection.EDIT_NORMAL


def plan_for(selection: ModelSelection, catalog: ModelCatalog) -> ModelPlan:
    """variant → 호출 계획."""
    if selection is ModelSelection.EDIT_PRO:
        return ModelPlan(
            selection=selection,
            model=catalog.edit_pro,
            response_modalities=C.EDIT_RESPONSE_MODALITIES,
            image_size=catalog.pro_image_size,
        )
    if selection is ModelSelection.EDIT_NORMAL:
        return ModelPlan(
            selection=selection,
            model=catalog.edit_normal,
            response_modalities=C.EDIT_RESPONSE_MODALITIES,
        )
    return ModelPlan(selection=selection, model=catalog.text)


class ModelDispatcher:
    """
    variant 선택 + provider 호출.

    Usage:
        dispatcher = ModelDispatcher(GeminiProvider(), ModelCatalog())
        plan = dispatcher.plan_edit(mode)
        reply = await dispatcher.run(plan, parts)
    """

    def __init__(self, provider: GenerationProvider, catalog: ModelCatalog):
        self.provider = provider
        self.catalog = catalog

    def plan_edit(self, mode: Any) -> ModelPlan:
        return plan_for(select_model(mode), self.catalog)

    def plan_text(self) -> ModelPlan:
        return plan_for(ModelSelection.TEXT, self.catalog)

    async def run(self, plan: ModelPlan, parts: list[ContentPart]) -> list[ReplyPart]:
        """원격 호출 1회. ProviderError는 그대로 전파."""
        logger.info(
            f"Dispatching {plan.selection.value} request "
            f"(model={plan.model}, parts={len(parts)})"
        )
        return await self.provider.generate(plan, parts)

    async def generate_text(self, prompt: str) -> str:
        """텍스트 전용 생성."""
        reply = await self.run(self.plan_text(), [TextPart(text=prompt)])
        return extract_text(reply)
