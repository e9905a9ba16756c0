"""
Pytest fixtures for the gateway tests.

구성:
- FakeUpload: fastapi.UploadFile 대역 (intake 단위 테스트)
- FakeProvider: 원격 모델 대역 (호출 기록 + 응답/예외 주입)
- client: 격리된 upload_dir + FakeProvider로 만든 TestClient
"""

import io
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from src.app.main import create_app
from src.app.providers.base import GenerationProvider
from src.domain.schemas import ContentPart, ModelPlan, ReplyPart

# =============================================================================
# Test Doubles
# =============================================================================


class FakeUpload:
    """업로드 스트림 대역."""

    def __init__(self, filename: str | None, content: bytes, content_type: str | None):
        self.filename = filename
        self.content_type = content_type
        self._stream = io.BytesIO(content)

    async def read(self, size: int = -1) -> bytes:
        return self._stream.read(size)


class FakeProvider(GenerationProvider):
    """원격 모델 대역."""

    def __init__(
        self,
        reply: list[ReplyPart] | None = None,
        error: Exception | None = None,
    ):
        self.reply = reply or []
        self.error = error
        self.calls: list[tuple[ModelPlan, list[ContentPart]]] = []

    async def generate(
        self,
        plan: ModelPlan,
        parts: list[ContentPart],
    ) -> list[ReplyPart]:
        self.calls.append((plan, list(parts)))
        if self.error is not None:
            raise self.error
        return list(self.reply)


@pytest.fixture
def make_upload() -> type[FakeUpload]:
    """FakeUpload 생성자."""
    return FakeUpload


@pytest.fixture
def make_provider() -> type[FakeProvider]:
    """FakeProvider 생성자."""
    return FakeProvider


# =============================================================================
# Data Fixtures
# =============================================================================

@pytest.fixture
def jpeg_bytes() -> bytes:
    """50KB 모의 JPEG."""
    return b"\xff\xd8\xff\xe0" + b"\x42" * (50 * 1024)


@pytest.fixture
def png_reply() -> list[ReplyPart]:
    """이미지 1개를 돌려주는 응답."""
    return [
        ReplyPart(text="here you go"),
        ReplyPart(data=b"\x89PNG-edited", mime_type="image/png"),
    ]


# =============================================================================
# App Fixtures
# =============================================================================

@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    """격리된 임시 업로드 디렉터리."""
    return tmp_path / "uploads"


@pytest.fixture
def gateway_config(upload_dir: Path) -> dict[str, Any]:
    """테스트용 설정."""
    return {
        "uploads": {
            "max_files": 10,
            "max_file_size": 10 * 1024 * 1024,
            "upload_dir": str(upload_dir),
        },
        "prompt": {"max_chars": 4000},
        "models": {
            "edit_pro": "pro-image-model",
            "edit_normal": "normal-image-model",
            "text": "text-model",
            "pro_image_size": "2K",
        },
        "rate_limits": {
            "window_seconds": 60,
            "global": 120,
            "edit": 12,
            "text": 60,
        },
    }


@pytest.fixture
def fake_provider(png_reply: list[ReplyPart]) -> FakeProvider:
    return FakeProvider(reply=png_reply)


@pytest.fixture
def client(
    gateway_config: dict[str, Any],
    fake_provider: FakeProvider,
) -> Generator[TestClient, None, None]:
    """FakeProvider를 주입한 TestClient."""
    app = create_app(gateway_config, provider=fake_provider)
    with TestClient(app) as test_client:
        yield test_client
