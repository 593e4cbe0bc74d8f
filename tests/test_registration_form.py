from io import BytesIO

import pytest
from starlette.datastructures import FormData, Headers, UploadFile

from app.core.exceptions import UploadValidationError
from app.schemas.registration import parse_registration_form


def upload(filename, data=b"data", content_type="image/png"):
    return UploadFile(
        file=BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


def form_with(*file_items, name="Ada Lovelace", email="ada@example.com"):
    items = [("name", name), ("email", email), *file_items]
    return FormData(items)


async def parse(form, max_size=1_000_000, max_attachments=10):
    return await parse_registration_form(form, max_size=max_size, max_attachments=max_attachments)


@pytest.mark.asyncio
async def test_parses_typed_form():
    form = form_with(
        ("profilePic", upload("ada.png", b"png-bytes")),
        ("uploadedFiles", upload("b.pdf", b"b", "application/pdf")),
        ("uploadedFiles", upload("a.gif", b"a", "image/gif")),
    )

    registration = await parse(form)

    assert registration.name == "Ada Lovelace"
    assert registration.email == "ada@example.com"
    assert registration.profile_pic.filename == "ada.png"
    assert registration.profile_pic.content_type == "image/png"
    assert registration.profile_pic.data == b"png-bytes"
    assert [f.filename for f in registration.uploaded_files] == ["b.pdf", "a.gif"]
    assert [f.filename for f in registration.all_files] == ["ada.png", "b.pdf", "a.gif"]


@pytest.mark.asyncio
async def test_text_fields_kept_as_submitted():
    form = form_with(
        ("profilePic", upload("ada.png")),
        name="  Ada Lovelace ",
        email=" ada@example.com",
    )

    registration = await parse(form)

    assert registration.name == "  Ada Lovelace "
    assert registration.email == " ada@example.com"


@pytest.mark.asyncio
async def test_attachments_are_optional():
    registration = await parse(form_with(("profilePic", upload("ada.png"))))
    assert registration.uploaded_files == []


@pytest.mark.asyncio
async def test_empty_file_parts_are_ignored():
    form = form_with(
        ("profilePic", upload("ada.png")),
        ("uploadedFiles", upload("", b"")),
    )
    assert (await parse(form)).uploaded_files == []


@pytest.mark.asyncio
async def test_reads_at_most_one_byte_past_limit():
    form = form_with(("profilePic", upload("ada.png", b"x" * 50)))

    registration = await parse(form, max_size=10)

    assert registration.profile_pic.size == 11


@pytest.mark.asyncio
@pytest.mark.parametrize("missing,message", [
    ("name", "name is required"),
    ("email", "email is required"),
])
async def test_missing_text_field(missing, message):
    kwargs = {missing: "   "}
    form = form_with(("profilePic", upload("ada.png")), **kwargs)

    with pytest.raises(UploadValidationError) as exc_info:
        await parse(form)
    assert exc_info.value.message == message


@pytest.mark.asyncio
async def test_missing_profile_picture():
    with pytest.raises(UploadValidationError) as exc_info:
        await parse(form_with(("uploadedFiles", upload("notes.pdf"))))
    assert exc_info.value.message == "Profile picture is required"


@pytest.mark.asyncio
async def test_two_profile_pictures_rejected():
    form = form_with(("profilePic", upload("a.png")), ("profilePic", upload("b.png")))

    with pytest.raises(UploadValidationError) as exc_info:
        await parse(form)
    assert exc_info.value.message == "Unexpected field: profilePic"


@pytest.mark.asyncio
async def test_attachment_bound():
    files = [("uploadedFiles", upload(f"{i}.png")) for i in range(11)]
    form = form_with(("profilePic", upload("ada.png")), *files)

    with pytest.raises(UploadValidationError) as exc_info:
        await parse(form)
    assert exc_info.value.message == "Unexpected field: uploadedFiles"
    assert exc_info.value.details["count"] == 11

    assert len((await parse(form_with(("profilePic", upload("ada.png")), *files[:10]))).uploaded_files) == 10


@pytest.mark.asyncio
async def test_unknown_file_field_rejected():
    form = form_with(("profilePic", upload("ada.png")), ("resume", upload("cv.pdf")))

    with pytest.raises(UploadValidationError) as exc_info:
        await parse(form)
    assert exc_info.value.message == "Unexpected field: resume"
