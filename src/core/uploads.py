"""
Upload Intake + Cleanup Guarantor.

보장:
- 요청당 파일 수/파일 크기/content-type 제한 → 원격 호출 전에 reject
- 각 파일은 uuid4 이름으로 임시 저장 (요청 간 충돌 없음)
- with 블록 종료 시 (성공/실패/예외 무관) 모든 임시 파일 삭제
- 삭제 실패는 삼킴 (응답을 막지 않음)
"""

import logging
import uuid
from pathlib import Path
from types import TracebackType
from typing import Protocol

from src.core.config import UploadLimits
from src.domain import constants as C
from src.domain.errors import ErrorCodes, GatewayError
from src.domain.schemas import UploadedFile

logger = logging.getLogger(__name__)


class IncomingFile(Protocol):
    """업로드 스트림 인터페이스 (fastapi.UploadFile 호환)."""

    filename: str | None
    content_type: str | None

    async def read(self, size: int = -1) -> bytes: ...


def release_file(path: Path) -> None:
    """
    임시 파일 삭제.

    이미 없거나 권한 오류여도 예외를 올리지 않는다.
    같은 경로로 여러 번 호출해도 안전.
    """
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.debug(f"Failed to remove transient upload {path}: {e}")


def is_image_type(content_type: str | None) -> bool:
    """image/* 여부."""
    if not content_type:
        return False
    return content_type.strip().lower().startswith(C.IMAGE_MIME_PREFIX)


class TransientUploadStore:
    """
    임시 업로드 저장소.

    Usage:
        store = TransientUploadStore(UploadLimits())
        store.prepare()
        with store.open_session() as session:
            files = await session.accept_all(images)
            ...
        # 여기서 임시 파일은 전부 삭제됨
    """

    def __init__(self, limits: UploadLimits):
        self.limits = limits
        self.upload_dir = limits.upload_dir

    def prepare(self) -> None:
        """저장 디렉터리 생성 (기동 시 1회)."""
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def new_path(self) -> Path:
        return self.upload_dir / uuid.uuid4().hex

    def open_session(self) -> "UploadSession":
        return UploadSession(self)


class UploadSession:
    """
    요청 하나가 소유하는 업로드 파일 묶음.

    accept 도중 실패해도 이미 쓰인 파일은 held에 등록되어 있으므로
    __exit__에서 함께 삭제된다.
    """

    def __init__(self, store: TransientUploadStore):
        self.store = store
        self.held: list[Path] = []
        self.files: list[UploadedFile] = []

    def __enter__(self) -> "UploadSession":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()

    async def accept_all(self, uploads: list[IncomingFile]) -> list[UploadedFile]:
        """
        업로드 목록 검증 + 임시 저장.

        Args:
            uploads: multipart 파일 목록 (수신 순서)

        Returns:
            저장된 UploadedFile 목록 (수신 순서 유지)

        Raises:
            GatewayError: TOO_MANY_FILES, UNEXPECTED_FILE_TYPE, FILE_TOO_LARGE
        """
        limits = self.store.limits

        # 파일 선택 없이 전송된 빈 파트는 무시
        # 타입 검사보다 먼저: filename 없는 비-이미지 파트도 UNEXPECTED_FILE_TYPE 없이 조용히 제외
        incoming = [u for u in uploads if u.filename]

        if len(incoming) > limits.max_files:
            raise GatewayError(
                ErrorCodes.TOO_MANY_FILES,
                C.MSG_TOO_MANY_FILES,
                count=len(incoming),
                limit=limits.max_files,
            )

        for upload in incoming:
            self.files.append(await self.accept(upload))

        return list(self.files)

    async def accept(self, upload: IncomingFile) -> UploadedFile:
        """파일 1개 검증 + 청크 단위 저장."""
        limits = self.store.limits
        filename = upload.filename or ""

        if not is_image_type(upload.content_type):
            raise GatewayError(
                ErrorCodes.UNEXPECTED_FILE_TYPE,
                C.MSG_UNEXPECTED_FILE,
                filename=filename,
                content_type=upload.content_type,
            )

        target = self.store.new_path()
        self.held.append(target)

        size = 0
        with open(target, "wb") as f:
            while True:
                chunk = await upload.read(C.UPLOAD_CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > limits.max_file_size:
                    raise GatewayError(
                        ErrorCodes.FILE_TOO_LARGE,
                        C.MSG_FILE_TOO_LARGE,
                        filename=filename,
                        limit=limits.max_file_size,
                    )
                f.write(chunk)

        return UploadedFile(
            path=target,
            mime_type=upload.content_type,
            size=size,
            original_filename=filename,
        )

    def release(self) -> None:
        """보유한 모든 임시 파일 삭제. 예외를 올리지 않는다."""
        for path in self.held:
            release_file(path)
        self.held.clear()
