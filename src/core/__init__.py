"""
Core layer: 요청 처리 공통 부품.

역할:
- config: default.yaml + 환경변수
- prompts: 프롬프트 정리
- uploads: 업로드 수신/임시 저장/삭제 보장
- ratelimit: 요청 수 제한
"""

from .config import (
    ModelCatalog,
    RateLimitPolicy,
    UploadLimits,
    load_config,
    require_api_key,
)
from .prompts import sanitize_prompt
from .ratelimit import RateDecision, RateGovernor
from .uploads import TransientUploadStore, UploadSession, release_file

__all__ = [
    # config
    "load_config",
    "require_api_key",
    "UploadLimits",
    "ModelCatalog",
    "RateLimitPolicy",
    # prompts
    "sanitize_prompt",
    # uploads
    "TransientUploadStore",
    "UploadSession",
    "release_file",
    # ratelimit
    "RateGovernor",
    "RateDecision",
]
