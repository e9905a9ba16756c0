"""
Request Assembler: 프롬프트 + 업로드 파일 → ContentPart 목록.

순서: 텍스트 1개 → 이미지 (업로드 순서)
- 경로 없음/읽기 실패/0바이트 파일은 조용히 건너뜀
- 유효 이미지 0개면 INVALID_IMAGE_PAYLOAD (원격 호출 전 중단)
"""

import base64
import logging
import mimetypes

from src.domain import constants as C
from src.domain.errors import ErrorCodes, GatewayError
from src.domain.schemas import ContentPart, InlineImagePart, TextPart, UploadedFile

logger = logging.getLogger(__name__)


def resolve_mime_type(uploaded: UploadedFile) -> str:
    """
    이미지 MIME 타입 결정.

    우선순위: 업로드 시 선언된 content-type → 파일명 확장자 추론
    → application/octet-stream
    """
    if uploaded.mime_type:
        return uploaded.mime_type

    guessed, _ = mimetypes.guess_type(uploaded.original_filename)
    return guessed or C.FALLBACK_MIME_TYPE


def read_upload(uploaded: UploadedFile) -> bytes | None:
    """임시 파일 읽기. 없거나 읽을 수 없으면 None."""
    try:
        return uploaded.path.read_bytes()
    except OSError as e:
        logger.debug(f"Skipping unreadable upload {uploaded.original_filename!r}: {e}")
        return None


def build_edit_parts(prompt: str, files: list[UploadedFile]) -> list[ContentPart]:
    """
    편집 요청 파트 조립.

    Args:
        prompt: 정리된 프롬프트 (비어 있지 않음)
        files: 업로드 파일 (수신 순서)

    Returns:
        [TextPart, InlineImagePart, ...] (최소 2개)

    Raises:
        GatewayError: INVALID_IMAGE_PAYLOAD (유효 이미지 없음)
    """
    parts: list[ContentPart] = [TextPart(text=prompt)]

    for uploaded in files:
        data = read_upload(uploaded)
        if not data:
            continue

        parts.append(
            InlineImagePart(
                mime_type=resolve_mime_type(uploaded),
                base64_data=base64.b64encode(data).decode("ascii"),
            )
        )

    if len(parts) < 2:
        raise GatewayError(
            ErrorCodes.INVALID_IMAGE_PAYLOAD,
            C.MSG_INVALID_IMAGE_PAYLOAD,
            received=len(files),
        )

    return parts
