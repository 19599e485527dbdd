"""MIME type lookup and image file checks."""

from __future__ import annotations

import os
from pathlib import Path

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")

_MIME_TYPES = {
    ".txt": "text/plain",
    ".pdf": "application/pdf",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".mp4": "video/mp4",
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".m4a": "audio/m4a",
    ".ogg": "audio/ogg",
    ".aac": "audio/aac",
    ".flac": "audio/flac",
    ".zip": "application/zip",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}

DEFAULT_MIME_TYPE = "application/octet-stream"


def _extension(path: str | os.PathLike) -> str:
    name = os.path.basename(os.fspath(path))
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def mime_type(path: str | os.PathLike) -> str:
    """Return the MIME type for ``path`` judged by its (case-sensitive) extension."""
    return _MIME_TYPES.get(_extension(path), DEFAULT_MIME_TYPE)


def validate_image(path: str | os.PathLike) -> Path:
    """Check that ``path`` exists and has an image extension; return it as a Path."""
    image = Path(path)
    if not image.exists():
        raise FileNotFoundError(f"image file does not exist: {os.fspath(path)}")
    ext = _extension(image).lower()
    if ext not in IMAGE_EXTENSIONS:
        raise ValueError(
            f"invalid image format: {ext} (supported: jpg, jpeg, png, gif, webp)"
        )
    return image