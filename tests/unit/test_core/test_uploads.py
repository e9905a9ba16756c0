"""
test_uploads.py - Upload Intake + Cleanup 테스트

검증 포인트:
1. 파일 수/크기/타입 제한 → GatewayError
2. 수신 순서 유지, uuid 이름으로 저장
3. with 블록 종료 시 성공/실패 무관 삭제
4. release_file 멱등성
"""

from pathlib import Path

import pytest

from src.core.config import UploadLimits
from src.core.uploads import TransientUploadStore, is_image_type, release_file
from src.domain.errors import ErrorCodes, GatewayError

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def store(tmp_path: Path) -> TransientUploadStore:
    """작은 제한을 가진 저장소."""
    limits = UploadLimits(
        max_files=3,
        max_file_size=1024,
        upload_dir=tmp_path / "uploads",
    )
    store = TransientUploadStore(limits)
    store.prepare()
    return store


def _stored_files(store: TransientUploadStore) -> list[Path]:
    return list(store.upload_dir.iterdir())


# =============================================================================
# 1. 수신/저장
# =============================================================================


class TestAccept:
    """업로드 수신 테스트."""

    async def test_accepts_images_in_order(self, store, make_upload):
        uploads = [
            make_upload("a.jpg", b"aaa", "image/jpeg"),
            make_upload("b.png", b"bbbb", "image/png"),
        ]

        with store.open_session() as session:
            files = await session.accept_all(uploads)

            assert [f.original_filename for f in files] == ["a.jpg", "b.png"]
            assert [f.size for f in files] == [3, 4]
            assert [f.mime_type for f in files] == ["image/jpeg", "image/png"]
            assert files[0].path.read_bytes() == b"aaa"
            assert files[1].path.read_bytes() == b"bbbb"

    async def test_stored_under_unique_names(self, store, make_upload):
        uploads = [make_upload("same.jpg", b"x", "image/jpeg") for _ in range(3)]

        with store.open_session() as session:
            files = await session.accept_all(uploads)

            paths = {f.path for f in files}
            assert len(paths) == 3
            assert all(p.parent == store.upload_dir for p in paths)
            assert all(p.name != "same.jpg" for p in paths)

    async def test_empty_filename_parts_ignored(self, store, make_upload):
        """파일 선택 없이 전송된 파트는 무시."""
        uploads = [
            make_upload("", b"", "application/octet-stream"),
            make_upload("a.jpg", b"a", "image/jpeg"),
        ]

        with store.open_session() as session:
            files = await session.accept_all(uploads)

        assert len(files) == 1

    async def test_unnamed_non_image_part_skipped_not_rejected(self, store, make_upload):
        uploads = [
            make_upload(None, b"plain text", "text/plain"),
            make_upload("a.jpg", b"a", "image/jpeg"),
        ]

        with store.open_session() as session:
            files = await session.accept_all(uploads)

        assert [f.original_filename for f in files] == ["a.jpg"]

    async def test_no_uploads(self, store):
        with store.open_session() as session:
            assert await session.accept_all([]) == []


# =============================================================================
# 2. 제한
# =============================================================================


class TestLimits:
    """제한 위반 테스트."""

    async def test_too_many_files(self, store, make_upload):
        uploads = [make_upload(f"{i}.jpg", b"x", "image/jpeg") for i in range(4)]

        with store.open_session() as session:
            with pytest.raises(GatewayError) as exc_info:
                await session.accept_all(uploads)

        assert exc_info.value.code == ErrorCodes.TOO_MANY_FILES
        # 개수 초과는 저장 전에 거절
        assert _stored_files(store) == []

    async def test_file_too_large(self, store, make_upload):
        uploads = [make_upload("big.jpg", b"x" * 1025, "image/jpeg")]

        with store.open_session() as session:
            with pytest.raises(GatewayError) as exc_info:
                await session.accept_all(uploads)

        assert exc_info.value.code == ErrorCodes.FILE_TOO_LARGE

    async def test_file_at_limit_accepted(self, store, make_upload):
        uploads = [make_upload("ok.jpg", b"x" * 1024, "image/jpeg")]

        with store.open_session() as session:
            files = await session.accept_all(uploads)

        assert files[0].size == 1024

    @pytest.mark.parametrize("content_type", ["text/plain", "application/pdf", None, ""])
    async def test_non_image_rejected(self, store, make_upload, content_type):
        uploads = [
            make_upload("a.jpg", b"a", "image/jpeg"),
            make_upload("notes.txt", b"hello", content_type),
        ]

        with store.open_session() as session:
            with pytest.raises(GatewayError) as exc_info:
                await session.accept_all(uploads)

        assert exc_info.value.code == ErrorCodes.UNEXPECTED_FILE_TYPE


# =============================================================================
# 3. Cleanup
# =============================================================================


class TestCleanup:
    """임시 파일 삭제 보장 테스트."""

    async def test_released_after_success(self, store, make_upload):
        with store.open_session() as session:
            await session.accept_all([make_upload("a.jpg", b"a", "image/jpeg")])
            assert len(_stored_files(store)) == 1

        assert _stored_files(store) == []

    async def test_released_after_exception(self, store, make_upload):
        with pytest.raises(RuntimeError):
            with store.open_session() as session:
                await session.accept_all([make_upload("a.jpg", b"a", "image/jpeg")])
                raise RuntimeError("remote call failed")

        assert _stored_files(store) == []

    async def test_partial_write_released_on_size_violation(self, store, make_upload):
        """크기 초과로 중단된 파일과 앞선 파일 모두 삭제."""
        uploads = [
            make_upload("a.jpg", b"a", "image/jpeg"),
            make_upload("big.jpg", b"x" * 4096, "image/jpeg"),
        ]

        with pytest.raises(GatewayError):
            with store.open_session() as session:
                await session.accept_all(uploads)

        assert _stored_files(store) == []

    async def test_release_tolerates_already_removed(self, store, make_upload):
        with store.open_session() as session:
            files = await session.accept_all([make_upload("a.jpg", b"a", "image/jpeg")])
            files[0].path.unlink()

        assert _stored_files(store) == []

    def test_release_file_idempotent(self, tmp_path: Path):
        """두 번 호출해도 예외 없음, 두 번째는 no-op."""
        target = tmp_path / "upload"
        target.write_bytes(b"data")

        release_file(target)
        release_file(target)

        assert not target.exists()

    def test_release_file_swallows_os_error(self, tmp_path: Path):
        """디렉터리처럼 삭제 불가한 경로도 예외 없음."""
        directory = tmp_path / "not-a-file"
        directory.mkdir()

        release_file(directory)

        assert directory.exists()


class TestIsImageType:
    """content-type 판별."""

    @pytest.mark.parametrize("value", ["image/jpeg", "image/png", "IMAGE/WEBP", " image/gif"])
    def test_image_types(self, value):
        assert is_image_type(value)

    @pytest.mark.parametrize("value", [None, "", "text/plain", "application/octet-stream"])
    def test_non_image_types(self, value):
        assert not is_image_type(value)
