"""
app/services/registration_service.py

Purpose: Registration pipeline

- Validates every submitted file before anything is written
- Stores the profile picture, then the attachments in submission order
- Persists the user record referencing the generated names
- Leaves already-written files in place when a later step fails
"""

from starlette.concurrency import run_in_threadpool
from typing import List

from app.core.exceptions import PersistenceError, StorageError
from app.core.logging import get_logger, LogContext
from app.models.user import NewUser, UserRecord
from app.schemas.registration import RegistrationForm
from app.services.file_store import FileStore
from app.services.upload_validator import validate_upload
from app.services.user_service import UserStore

logger = get_logger(__name__)


def validate_registration(form: RegistrationForm, max_size: int) -> None:
    """Runs the upload validator on every file of the form."""
    for submitted in form.all_files:
        with LogContext(upload_name=submitted.filename):
            validate_upload(
                submitted.filename,
                submitted.content_type,
                submitted.size,
                max_size=max_size
            )


async def register_user(
    form: RegistrationForm,
    file_store: FileStore,
    user_store: UserStore,
    max_size: int
) -> UserRecord:
    """
    Validates, stores and persists one registration.

    Args:
        form: Parsed registration form
        file_store: Destination for uploaded files
        user_store: Destination for the user record
        max_size: Per-file size limit in bytes

    Returns:
        The saved user record

    Raises:
        UploadValidationError: If any file is rejected (nothing is written)
        StorageError: If a file write fails
        PersistenceError: If the record cannot be saved
    """
    validate_registration(form, max_size)

    with LogContext(email=form.email):
        written: List[str] = []

        try:
            profile_pic = await run_in_threadpool(
                file_store.store, form.profile_pic.data, form.profile_pic.filename
            )
            written.append(profile_pic)

            uploaded_files = []
            for submitted in form.uploaded_files:
                stored_name = await run_in_threadpool(
                    file_store.store, submitted.data, submitted.filename
                )
                written.append(stored_name)
                uploaded_files.append(stored_name)

            record = await user_store.create(
                NewUser(
                    name=form.name,
                    email=form.email,
                    profile_pic=profile_pic,
                    uploaded_files=uploaded_files,
                )
            )
        except (StorageError, PersistenceError):
            if written:
                logger.warning(f"Registration failed; leaving orphaned files: {', '.join(written)}")
            raise

        logger.info(
            f"Registered user with {len(uploaded_files)} additional file(s)",
            extra={"user_id": record.id}
        )
        return record
