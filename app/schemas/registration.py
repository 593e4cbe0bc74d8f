"""
app/schemas/registration.py

Purpose: Registration form schema and parser

- Turns the multipart body into a typed RegistrationForm
- Enforces required fields and per-field file counts at the boundary
- Reads each file at most one byte past the size limit

Starlette has already spooled every part to a temporary file by the time
the form is parsed; the whole body is bounded earlier by
RequestSizeLimitMiddleware (MAX_REQUEST_SIZE).
"""

from pydantic import BaseModel, Field
from starlette.datastructures import FormData, UploadFile
from typing import List, Optional

from app.core.exceptions import UploadValidationError

PROFILE_PIC_FIELD = "profilePic"
UPLOADED_FILES_FIELD = "uploadedFiles"
FILE_FIELDS = (PROFILE_PIC_FIELD, UPLOADED_FILES_FIELD)


class SubmittedFile(BaseModel):
    """
    One file part of the registration form.

    `data` holds at most max_size + 1 bytes, so an oversized file is
    detected from `size` without buffering all of it.
    """
    filename: str
    content_type: Optional[str] = None
    data: bytes = Field(repr=False)

    @property
    def size(self) -> int:
        return len(self.data)


class RegistrationForm(BaseModel):
    """Typed input of POST /register."""
    name: str
    email: str
    profile_pic: SubmittedFile
    uploaded_files: List[SubmittedFile] = Field(default_factory=list)

    @property
    def all_files(self) -> List[SubmittedFile]:
        return [self.profile_pic, *self.uploaded_files]


def _is_file(value) -> bool:
    return isinstance(value, UploadFile) and bool(value.filename)


def _required_text(form: FormData, field: str) -> str:
    value = form.get(field)
    if not isinstance(value, str) or not value.strip():
        raise UploadValidationError(f"{field} is required", details={"field": field})
    return value


async def _read_part(upload: UploadFile, max_size: int) -> SubmittedFile:
    data = await upload.read(max_size + 1)
    return SubmittedFile(
        filename=upload.filename,
        content_type=upload.content_type,
        data=data,
    )


async def parse_registration_form(
    form: FormData,
    max_size: int,
    max_attachments: int
) -> RegistrationForm:
    """
    Builds a RegistrationForm from parsed multipart data.

    Args:
        form: Parsed request form
        max_size: Per-file size limit in bytes
        max_attachments: Maximum number of uploadedFiles parts

    Returns:
        RegistrationForm with file contents loaded

    Raises:
        UploadValidationError: On missing fields or unexpected file parts
    """
    for key, value in form.multi_items():
        if _is_file(value) and key not in FILE_FIELDS:
            raise UploadValidationError(f"Unexpected field: {key}", details={"field": key})

    profile_parts = [v for v in form.getlist(PROFILE_PIC_FIELD) if _is_file(v)]
    attachment_parts = [v for v in form.getlist(UPLOADED_FILES_FIELD) if _is_file(v)]

    if len(profile_parts) > 1:
        raise UploadValidationError(
            f"Unexpected field: {PROFILE_PIC_FIELD}",
            details={"field": PROFILE_PIC_FIELD, "count": len(profile_parts), "max": 1}
        )

    if len(attachment_parts) > max_attachments:
        raise UploadValidationError(
            f"Unexpected field: {UPLOADED_FILES_FIELD}",
            details={
                "field": UPLOADED_FILES_FIELD,
                "count": len(attachment_parts),
                "max": max_attachments
            }
        )

    if not profile_parts:
        raise UploadValidationError(
            "Profile picture is required",
            details={"field": PROFILE_PIC_FIELD}
        )

    name = _required_text(form, "name")
    email = _required_text(form, "email")

    return RegistrationForm(
        name=name,
        email=email,
        profile_pic=await _read_part(profile_parts[0], max_size),
        uploaded_files=[await _read_part(part, max_size) for part in attachment_parts],
    )
