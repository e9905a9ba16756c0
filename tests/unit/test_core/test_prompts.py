"""
test_prompts.py - Prompt Sanitizer 테스트

검증 포인트:
- 상한 초과 → 정확히 상한 길이, trim된 입력의 prefix
- 공백/None/비문자열 → ""
"""

import pytest

from src.core.prompts import sanitize_prompt
from src.domain.constants import PROMPT_MAX_CHARS


class TestSanitizePrompt:
    """sanitize_prompt 테스트."""

    def test_trims_whitespace(self):
        assert sanitize_prompt("  make it blue \n") == "make it blue"

    @pytest.mark.parametrize("value", [None, "", "   ", "\n\t ", 42, ["a"], {"x": 1}])
    def test_empty_or_non_string_becomes_empty(self, value):
        """없음/공백/비문자열 → 빈 문자열."""
        assert sanitize_prompt(value) == ""

    @pytest.mark.parametrize("length", [PROMPT_MAX_CHARS + 1, PROMPT_MAX_CHARS * 3])
    def test_long_prompt_clamped_to_exact_cap(self, length):
        """상한 초과 → 정확히 상한, trim된 입력의 prefix."""
        raw = "  " + "".join(chr(ord("a") + i % 26) for i in range(length)) + "  "

        result = sanitize_prompt(raw)

        assert len(result) == PROMPT_MAX_CHARS
        assert raw.strip().startswith(result)

    def test_prompt_at_cap_unchanged(self):
        raw = "x" * PROMPT_MAX_CHARS
        assert sanitize_prompt(raw) == raw

    def test_custom_cap(self):
        assert sanitize_prompt("abcdef", max_chars=3) == "abc"

    def test_inner_whitespace_kept_at_cut(self):
        """잘린 끝의 공백은 다시 trim하지 않는다 (prefix 유지)."""
        assert sanitize_prompt("ab cd", max_chars=3) == "ab "
