"""
AI Provider 추상 인터페이스.

- Provider 추상화로 원격 모델 교체 가능
- 모델명/설정은 ModelPlan으로만 전달 (provider는 variant 선택 안 함)
- 응답은 ReplyPart 목록으로 정규화해서 반환 (SDK 타입 누출 금지)
"""

from abc import ABC, abstractmethod
from typing import Any

from src.domain.errors import ErrorCodes, GatewayError
from src.domain.schemas import ContentPart, ModelPlan, ReplyPart

# =============================================================================
# Provider Exceptions
# =============================================================================

class ProviderError(GatewayError):
    """
    원격 호출 실패.

    원인 예외는 __cause__로 보존 (raise ... from e), 클라이언트에는 노출 안 함.
    """

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(ErrorCodes.GENERATION_FAILED, message, **context)


# =============================================================================
# Abstract Provider
# =============================================================================

class GenerationProvider(ABC):
    """
    생성형 모델 Provider 추상 인터페이스.

    재시도/스트리밍 없음: 호출 1회, 실패는 ProviderError로 전파.
    """

    @abstractmethod
    async def generate(
        self,
        plan: ModelPlan,
        parts: list[ContentPart],
    ) -> list[ReplyPart]:
        """
        원격 생성 호출.

        Args:
            plan: 모델 ID + 출력 설정
            parts: 요청 파트 (텍스트 1개 + 이미지 0..N개)

        Returns:
            첫 번째 후보 응답의 파트 목록 (비어 있을 수 있음)

        Raises:
            ProviderError: 원격 호출 실패
        """
        ...
