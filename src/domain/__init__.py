"""Domain layer: errors, schemas and constants."""

from .errors import ConfigError, ErrorCodes, GatewayError
from .schemas import (
    ContentPart,
    GenerationResult,
    InlineImagePart,
    ModelPlan,
    ModelSelection,
    ReplyPart,
    TextPart,
    UploadedFile,
)

__all__ = [
    "GatewayError",
    "ErrorCodes",
    "ConfigError",
    "UploadedFile",
    "ContentPart",
    "TextPart",
    "InlineImagePart",
    "ModelSelection",
    "ModelPlan",
    "ReplyPart",
    "GenerationResult",
]
