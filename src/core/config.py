"""
Configuration: default.yaml + 환경변수.

우선순위:
- 비밀값(GOOGLE_API_KEY)은 환경변수만
- PORT 환경변수 > server.port
- 그 외는 default.yaml > 코드 기본값(domain/constants.py)
"""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from src.domain import constants as C
from src.domain.errors import ConfigError

API_KEY_ENV = "GOOGLE_API_KEY"
PORT_ENV = "PORT"
CONFIG_PATH_ENV = "GATEWAY_CONFIG"

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "default.yaml"


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """
    설정 파일 로드.

    Args:
        config_path: YAML 경로 (None이면 GATEWAY_CONFIG 또는 루트 default.yaml)

    Returns:
        설정 dict (파일 없으면 빈 dict)
    """
    if config_path is None:
        env_path = os.environ.get(CONFIG_PATH_ENV)
        config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[str, Any] | None = yaml.safe_load(f)
        return data or {}


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    value = config.get(name) or {}
    return value if isinstance(value, dict) else {}


def require_api_key() -> str:
    """
    API 키 확인 (기동 시 1회).

    Raises:
        ConfigError: GOOGLE_API_KEY 미설정
    """
    api_key = os.environ.get(API_KEY_ENV, "").strip()
    if not api_key:
        raise ConfigError(f"missing {API_KEY_ENV} environment variable")
    return api_key


def resolve_port(config: dict[str, Any]) -> int:
    """리스닝 포트. PORT 환경변수 우선."""
    env_port = os.environ.get(PORT_ENV)
    if env_port:
        return int(env_port)
    return int(_section(config, "server").get("port", C.DEFAULT_PORT))


def resolve_host(config: dict[str, Any]) -> str:
    return str(_section(config, "server").get("host", C.DEFAULT_HOST))


# =============================================================================
# Typed Views
# =============================================================================

@dataclass(frozen=True)
class UploadLimits:
    """업로드 제한 + 임시 저장 위치."""
    max_files: int = C.MAX_FILES_PER_REQUEST
    max_file_size: int = C.MAX_FILE_SIZE_BYTES
    upload_dir: Path = Path(tempfile.gettempdir()) / C.UPLOAD_DIR_NAME

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "UploadLimits":
        section = _section(config, "uploads")
        upload_dir = section.get("upload_dir")
        return cls(
            max_files=int(section.get("max_files", C.MAX_FILES_PER_REQUEST)),
            max_file_size=int(section.get("max_file_size", C.MAX_FILE_SIZE_BYTES)),
            upload_dir=(
                Path(upload_dir)
                if upload_dir
                else Path(tempfile.gettempdir()) / C.UPLOAD_DIR_NAME
            ),
        )


@dataclass(frozen=True)
class ModelCatalog:
    """variant → 원격 모델 ID 매핑."""
    edit_pro: str = C.DEFAULT_EDIT_PRO_MODEL
    edit_normal: str = C.DEFAULT_EDIT_NORMAL_MODEL
    text: str = C.DEFAULT_TEXT_MODEL
    pro_image_size: str = C.DEFAULT_PRO_IMAGE_SIZE

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "ModelCatalog":
        section = _section(config, "models")
        return cls(
            edit_pro=str(section.get("edit_pro", C.DEFAULT_EDIT_PRO_MODEL)),
            edit_normal=str(section.get("edit_normal", C.DEFAULT_EDIT_NORMAL_MODEL)),
            text=str(section.get("text", C.DEFAULT_TEXT_MODEL)),
            pro_image_size=str(
                section.get("pro_image_size", C.DEFAULT_PRO_IMAGE_SIZE)
            ),
        )


@dataclass(frozen=True)
class RateLimitPolicy:
    """클라이언트당 rolling window 제한."""
    window_seconds: int = C.RATE_WINDOW_SECONDS
    global_limit: int = C.RATE_LIMIT_GLOBAL
    edit_limit: int = C.RATE_LIMIT_EDIT
    text_limit: int = C.RATE_LIMIT_TEXT
    storage_uri: str = C.RATE_STORAGE_URI

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "RateLimitPolicy":
        section = _section(config, "rate_limits")
        return cls(
            window_seconds=int(section.get("window_seconds", C.RATE_WINDOW_SECONDS)),
            global_limit=int(section.get("global", C.RATE_LIMIT_GLOBAL)),
            edit_limit=int(section.get("edit", C.RATE_LIMIT_EDIT)),
            text_limit=int(section.get("text", C.RATE_LIMIT_TEXT)),
            storage_uri=str(section.get("storage_uri", C.RATE_STORAGE_URI)),
        )

    def limit_for(self, route_class: str) -> int:
        """route class별 요청 수 상한."""
        limits = {
            C.ROUTE_CLASS_GLOBAL: self.global_limit,
            C.ROUTE_CLASS_EDIT: self.edit_limit,
            C.ROUTE_CLASS_TEXT: self.text_limit,
        }
        if route_class not in limits:
            raise KeyError(f"unknown route class: {route_class}")
        return limits[route_class]


def prompt_max_chars(config: dict[str, Any]) -> int:
    return int(_section(config, "prompt").get("max_chars", C.PROMPT_MAX_CHARS))
