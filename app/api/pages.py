"""
app/api/pages.py

Purpose: Registration web pages

- GET  /                    registration form
- POST /register            validate, store files, save user, redirect to /list
- GET  /list                all registered users
- GET  /download/{filename} stored file as an attachment

Downloads are not tied to the user owning the file: anyone who knows a
generated name can fetch it.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse, HTMLResponse, PlainTextResponse, RedirectResponse
from starlette.concurrency import run_in_threadpool

from app.api.deps import get_file_store, get_settings, get_user_store
from app.core.config import Settings
from app.core.exceptions import ProfileDropError
from app.core.logging import get_logger, LogContext
from app.schemas.registration import RegistrationForm, parse_registration_form
from app.services.file_store import FileStore
from app.services.registration_service import register_user, validate_registration
from app.services.user_service import UserStore
from app.views.pages import render_registration_form, render_user_list

logger = get_logger(__name__)
router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def show_form(app_settings: Settings = Depends(get_settings)):
    """Registration form."""
    return HTMLResponse(render_registration_form(app_settings.MAX_ATTACHMENTS))


async def validated_registration(
    request: Request,
    app_settings: Settings = Depends(get_settings),
) -> RegistrationForm:
    """
    Parses and validates the registration body.

    Declared ahead of the stores in `register`, so a rejected upload is
    reported before the database is looked up.
    """
    async with request.form() as form:
        registration = await parse_registration_form(
            form,
            max_size=app_settings.MAX_UPLOAD_SIZE,
            max_attachments=app_settings.MAX_ATTACHMENTS
        )

    validate_registration(registration, app_settings.MAX_UPLOAD_SIZE)
    return registration


@router.post("/register")
async def register(
    registration: RegistrationForm = Depends(validated_registration),
    app_settings: Settings = Depends(get_settings),
    file_store: FileStore = Depends(get_file_store),
    user_store: UserStore = Depends(get_user_store),
):
    """
    Registers a user with a profile picture and up to MAX_ATTACHMENTS files.

    Every file is validated before the first one is written. Files written
    before a later failure stay on disk.
    """
    logger.info(
        f"Registration received with {len(registration.uploaded_files)} additional file(s)",
        extra={"email": registration.email}
    )

    await register_user(
        registration,
        file_store=file_store,
        user_store=user_store,
        max_size=app_settings.MAX_UPLOAD_SIZE
    )

    return RedirectResponse(url="/list", status_code=302)


@router.get("/list", response_class=HTMLResponse)
async def list_users(user_store: UserStore = Depends(get_user_store)):
    """Every registered user, in storage order."""
    users = await user_store.list_all()
    return HTMLResponse(render_user_list(users))


@router.get("/download/{filename}")
async def download(filename: str, file_store: FileStore = Depends(get_file_store)):
    """
    Streams a stored file back as an attachment.

    Missing files are reported as a server error, like read failures.
    """
    with LogContext(stored_name=filename):
        try:
            path = await run_in_threadpool(file_store.resolve, filename)
        except ProfileDropError as e:
            logger.error(f"Download failed: {e.message}")
            return PlainTextResponse(
                f"Error downloading file: {e.message}",
                status_code=e.status_code
            )

    return FileResponse(path, filename=filename)
