"""
Application Services.

역할:
- assembler: 프롬프트 + 업로드 → 요청 파트
- dispatch: mode → 모델 variant 선택 + 원격 호출
- extract: 원격 응답 → 이미지/텍스트 결과
"""

from .assembler import build_edit_parts, resolve_mime_type
from .dispatch import ModelDispatcher, plan_for, select_model
from .extract import extract_generation_result, extract_text

__all__ = [
    "build_edit_parts",
    "resolve_mime_type",
    "ModelDispatcher",
    "plan_for",
    "select_model",
    "extract_generation_result",
    "extract_text",
]
