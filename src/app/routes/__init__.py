"""
FastAPI Routes.

- edit: POST /edit (multipart → 이미지)
- text: POST /text (JSON → JSON)
"""

from . import edit, text

__all__ = ["edit", "text"]
