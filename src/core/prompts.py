"""
Prompt Sanitizer.

- 문자열이 아니거나 없음 → ""
- 앞뒤 공백 제거 후 max_chars로 자름 (초과분은 조용히 버림, 에러 아님)
- 빈 문자열은 호출자가 invalid로 처리
"""

from typing import Any

from src.domain.constants import PROMPT_MAX_CHARS


def sanitize_prompt(value: Any, max_chars: int = PROMPT_MAX_CHARS) -> str:
    """
    프롬프트 정리.

    Args:
        value: 폼/JSON에서 받은 원본 값 (None, 숫자 등 가능)
        max_chars: 최대 문자 수

    Returns:
        trim + 길이 제한된 문자열
    """
    if not isinstance(value, str):
        return ""

    return value.strip()[:max_chars]
