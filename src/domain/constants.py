"""
Domain Constants: 게이트웨이 전역 기본값.

default.yaml에 값이 없을 때 사용되는 값들.
"""

# =============================================================================
# Upload Limits (업로드 제한)
# =============================================================================

MAX_FILES_PER_REQUEST = 10
MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024  # 10 MiB
UPLOAD_CHUNK_SIZE = 64 * 1024
UPLOAD_DIR_NAME = "image-edit-gateway"

# =============================================================================
# Prompt
# =============================================================================

PROMPT_MAX_CHARS = 4000

# =============================================================================
# MIME Types
# =============================================================================

IMAGE_MIME_PREFIX = "image/"
FALLBACK_MIME_TYPE = "application/octet-stream"
DEFAULT_OUTPUT_MIME_TYPE = "image/png"

# =============================================================================
# Models (모델명은 config가 SSOT, 여기는 기본값)
# =============================================================================

MODE_PRO = "pro"

DEFAULT_EDIT_PRO_MODEL = "gemini-3-pro-image-preview"
DEFAULT_EDIT_NORMAL_MODEL = "gemini-2.5-flash-image"
DEFAULT_TEXT_MODEL = "gemini-2.5-flash"
DEFAULT_PRO_IMAGE_SIZE = "2K"

EDIT_RESPONSE_MODALITIES = ("image", "text")

# =============================================================================
# Rate Limits (클라이언트당, 60초 rolling window)
# =============================================================================

RATE_WINDOW_SECONDS = 60
RATE_LIMIT_GLOBAL = 120
RATE_LIMIT_EDIT = 12
RATE_LIMIT_TEXT = 60
RATE_STORAGE_URI = "memory://"

ROUTE_CLASS_GLOBAL = "global"
ROUTE_CLASS_EDIT = "edit"
ROUTE_CLASS_TEXT = "text"

# =============================================================================
# Response Messages (클라이언트 노출 문구)
# =============================================================================

MSG_PROMPT_REQUIRED = "prompt is required"
MSG_NO_IMAGES = "no images uploaded"
MSG_INVALID_IMAGE_PAYLOAD = "invalid image payload"
MSG_NO_IMAGE_RETURNED = "no image returned by model"
MSG_TOO_MANY_FILES = "too many files"
MSG_FILE_TOO_LARGE = "file too large"
MSG_UNEXPECTED_FILE = "unexpected file"
MSG_INVALID_BODY = "invalid request body"
MSG_RATE_LIMITED = "too many requests, please try again later"
MSG_INTERNAL_ERROR = "internal server error"

# =============================================================================
# Server
# =============================================================================

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
