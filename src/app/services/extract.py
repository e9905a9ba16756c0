"""
Response Extractor: 원격 응답 파트 → GenerationResult / 텍스트.
"""

from src.domain.constants import DEFAULT_OUTPUT_MIME_TYPE
from src.domain.schemas import GenerationResult, ReplyPart


def join_reply_text(reply: list[ReplyPart]) -> str:
    """텍스트 파트를 순서대로 줄바꿈 연결 후 trim."""
    return "\n".join(part.text for part in reply if part.text).strip()


def extract_generation_result(reply: list[ReplyPart]) -> GenerationResult:
    """
    편집 응답 해석.

    바이너리 데이터가 있는 첫 파트가 이미지 결과 (mime 없으면 image/png).
    이미지가 없으면 텍스트 fallback (빈 문자열일 수 있음 → 호출자가 502 처리).
    """
    for part in reply:
        if part.data:
            return GenerationResult(
                image_bytes=part.data,
                mime_type=part.mime_type or DEFAULT_OUTPUT_MIME_TYPE,
            )

    return GenerationResult(text=join_reply_text(reply))


def extract_text(reply: list[ReplyPart]) -> str:
    """텍스트 생성 응답 해석. 이미지 파트는 보지 않는다."""
    return join_reply_text(reply)
