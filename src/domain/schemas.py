"""
Data schemas for the gateway.

규칙:
- UploadedFile은 요청 하나가 독점 소유 (요청 종료 시 반드시 삭제)
- ContentPart 순서: 텍스트 1개 → 이미지 0..N개 (업로드 순서 유지)
- GenerationResult는 image/text 중 하나만
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

# =============================================================================
# Upload
# =============================================================================

@dataclass(frozen=True)
class UploadedFile:
    """
    임시 저장된 업로드 파일 핸들.

    생성: Upload Intake (TransientUploadStore.accept)
    사용: Request Assembler (1회 읽기)
    삭제: Cleanup Guarantor (성공/실패 무관)
    """
    path: Path
    mime_type: str | None  # 업로드 시 선언된 content-type
    size: int
    original_filename: str


# =============================================================================
# Content Parts
# =============================================================================

@dataclass(frozen=True)
class TextPart:
    """텍스트 파트."""
    text: str


@dataclass(frozen=True)
class InlineImagePart:
    """인라인 이미지 파트. data는 표준 base64 문자열."""
    mime_type: str
    base64_data: str


ContentPart = TextPart | InlineImagePart


# =============================================================================
# Model Selection
# =============================================================================

class ModelSelection(str, Enum):
    """
    원격 모델 variant.

    EDIT_PRO: 고품질 이미지 편집 (mode="pro")
    EDIT_NORMAL: 기본 이미지 편집
    TEXT: 텍스트 생성 전용
    """
    EDIT_PRO = "edit_pro"
    EDIT_NORMAL = "edit_normal"
    TEXT = "text"


@dataclass(frozen=True)
class ModelPlan:
    """
    선택된 variant에 대한 원격 호출 계획.

    provider는 이 계획만 보고 SDK 설정을 만든다.
    """
    selection: ModelSelection
    model: str
    response_modalities: tuple[str, ...] = ()
    image_size: str | None = None  # EDIT_PRO 전용 출력 크기 힌트


# =============================================================================
# Generation Result
# =============================================================================

@dataclass(frozen=True)
class ReplyPart:
    """원격 응답 파트 1개 (provider가 SDK 응답을 정규화한 형태)."""
    text: str | None = None
    data: bytes | None = None  # 인라인 바이너리 (디코딩된 바이트)
    mime_type: str | None = None


@dataclass(frozen=True)
class GenerationResult:
    """
    원격 모델 응답 해석 결과.

    image_bytes가 있으면 이미지 결과, 없으면 text가 fallback.
    """
    image_bytes: bytes | None = None
    mime_type: str | None = None
    text: str = ""

    @property
    def has_image(self) -> bool:
        return self.image_bytes is not None
