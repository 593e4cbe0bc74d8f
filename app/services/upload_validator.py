"""
app/services/upload_validator.py

Purpose: Upload gate

- Extension allow-list (jpeg, jpg, png, gif, pdf)
- Declared content-type checked against the same pattern
- Per-file size limit
- Pure functions, no I/O
"""

import re
from typing import Optional

from app.core.exceptions import UploadValidationError

ALLOWED_EXTENSIONS = frozenset({"jpeg", "jpg", "png", "gif", "pdf"})
ALLOWED_TYPES_PATTERN = re.compile(r"jpeg|jpg|png|gif|pdf")
DEFAULT_MAX_UPLOAD_SIZE = 1_000_000

TYPE_NOT_ALLOWED_MESSAGE = "Only images and PDF files are allowed"
FILE_TOO_LARGE_MESSAGE = "File too large"


def get_extension(filename: Optional[str]) -> str:
    """
    Returns the lowercase extension of a filename, without the dot.

    >>> get_extension("Scan.PDF")
    'pdf'
    >>> get_extension("README")
    ''
    """
    if not filename:
        return ""
    _, dot, ext = filename.rpartition(".")
    return ext.lower() if dot else ""


def validate_upload(
    filename: Optional[str],
    content_type: Optional[str],
    size: int,
    max_size: int = DEFAULT_MAX_UPLOAD_SIZE
) -> None:
    """
    Accepts or rejects a single submitted file.

    Args:
        filename: Original filename sent by the client
        content_type: Declared MIME type of the part
        size: Size of the content in bytes
        max_size: Largest accepted size in bytes

    Raises:
        UploadValidationError: If the type or size is not allowed
    """
    extension_ok = get_extension(filename) in ALLOWED_EXTENSIONS
    mimetype_ok = bool(ALLOWED_TYPES_PATTERN.search((content_type or "").lower()))

    if not (extension_ok and mimetype_ok):
        raise UploadValidationError(
            TYPE_NOT_ALLOWED_MESSAGE,
            details={"filename": filename, "content_type": content_type}
        )

    if size > max_size:
        raise UploadValidationError(
            FILE_TOO_LARGE_MESSAGE,
            details={"filename": filename, "size": size, "max_size": max_size}
        )
