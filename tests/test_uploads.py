"""Tests for uploaded-file checks and MIME resolution."""

import pytest

from fieldcheck.validators import (
    ErrorCode,
    MappedValidationEngine,
    MimeTypeNotFound,
    NoExtension,
    UploadedFile,
    UploadRegistry,
    resolve_mime_type,
)
from fieldcheck.validators.uploads import inspect_content, is_file_type_valid


def test_is_uploaded_file(uploads) -> None:
    assert uploads.is_uploaded_file("avatar")
    assert not uploads.is_uploaded_file("gone")
    assert not uploads.is_uploaded_file("nobody")
    assert "gone" in uploads
    assert uploads.fields() == ["avatar", "resume", "gone"]


def test_size_is_read_from_disk_not_declared(uploads, png_bytes) -> None:
    size = len(png_bytes)

    assert uploads.get("avatar").size_bytes == 1
    assert not uploads.is_file_not_too_large("avatar", 10)
    assert not uploads.is_file_not_too_large("avatar", size - 1)
    assert uploads.is_file_not_too_large("avatar", size)
    assert not uploads.is_file_not_too_large("gone", 10_000)


def test_uploaded_file_type_by_content(uploads) -> None:
    assert uploads.is_uploaded_file_type_valid("avatar", ["image/png"])
    assert uploads.is_uploaded_file_type_valid("avatar", "image/*")
    assert not uploads.is_uploaded_file_type_valid("avatar", ["image/jpeg", "application/pdf"])
    assert uploads.is_uploaded_file_type_valid("resume", ["text/plain"])
    assert not uploads.is_uploaded_file_type_valid("gone", ["application/pdf"])


def test_content_wins_over_misleading_extension(tmp_path, png_bytes) -> None:
    disguised = tmp_path / "holiday.txt"
    disguised.write_bytes(png_bytes)

    assert resolve_mime_type(disguised) == "image/png"
    assert resolve_mime_type(disguised, content_inspection=False) == "text/plain"


def test_extension_fallback_uses_original_filename(tmp_path, png_bytes) -> None:
    temporary = tmp_path / "upload9876"
    temporary.write_bytes(png_bytes)
    uploads = UploadRegistry(
        {"avatar": UploadedFile(temporary_path=temporary, original_filename="Me.PNG")},
        content_inspection=False,
    )

    assert uploads.is_uploaded_file_type_valid("avatar", ["image/png"])
    assert uploads.get("avatar").extension == "png"


def test_extension_fallback_without_extension_raises(tmp_path) -> None:
    path = tmp_path / "README"
    path.write_text("hello", encoding="utf-8")

    with pytest.raises(NoExtension) as excinfo:
        resolve_mime_type(path, content_inspection=False)

    assert excinfo.value.code is ErrorCode.NO_EXTENSION


def test_unknown_extension_raises(tmp_path) -> None:
    path = tmp_path / "data.zzqx"
    path.write_text("hello", encoding="utf-8")

    with pytest.raises(MimeTypeNotFound):
        resolve_mime_type(path, content_inspection=False)


def test_inspector_without_answer_raises(tmp_path) -> None:
    path = tmp_path / "data.txt"
    path.write_text("hello", encoding="utf-8")

    with pytest.raises(MimeTypeNotFound) as excinfo:
        resolve_mime_type(path, inspector=lambda _: None)

    assert excinfo.value.code is ErrorCode.MIME_TYPE_NOT_FOUND


def test_content_inspection_can_be_disabled_by_settings(monkeypatch, tmp_path, png_bytes) -> None:
    monkeypatch.setenv("FIELDCHECK_CONTENT_INSPECTION", "false")
    disguised = tmp_path / "notes.txt"
    disguised.write_bytes(png_bytes)

    assert resolve_mime_type(disguised) == "text/plain"


@pytest.mark.parametrize(
    "content, expected",
    [
        (b"", "application/x-empty"),
        (b"%PDF-1.7\n", "application/pdf"),
        (b"\xff\xd8\xff\xe0\x00\x10JFIF", "image/jpeg"),
        (b"RIFF\x00\x00\x00\x00WEBPVP8 ", "image/webp"),
        (b"PK\x03\x04rest", "application/zip"),
        (b"\x01\x02\x00\x03", "application/octet-stream"),
        ("naïve café\n".encode("utf-8"), "text/plain"),
    ],
)
def test_inspect_content(tmp_path, content, expected) -> None:
    path = tmp_path / "upload"
    path.write_bytes(content)

    assert inspect_content(path) == expected


def test_inspect_content_unreadable_file(tmp_path) -> None:
    assert inspect_content(tmp_path / "missing") is None


def test_is_file_type_valid_for_plain_paths(tmp_path) -> None:
    path = tmp_path / "report.pdf"
    path.write_bytes(b"%PDF-1.4\n")

    assert is_file_type_valid(path, ["application/pdf"])
    assert is_file_type_valid(str(path), "application/*")
    assert not is_file_type_valid(path, ["image/png"])


def test_engine_registers_upload_rules(uploads, png_bytes) -> None:
    engine = MappedValidationEngine(
        {
            "avatar": "is_uploaded_file_type_valid",
            "avatar_size": "is_file_not_too_large",
            "resume": "is_uploaded_file",
        },
        uploads=uploads,
        requirements=["avatar", "resume"],
    )

    assert engine.is_valid("avatar", "avatar", ["image/png"])
    assert engine.is_valid("avatar_size", "avatar", len(png_bytes))
    assert not engine.is_valid("avatar_size", "avatar", 8)
    assert engine.is_valid("resume", "resume")
    assert engine.is_complete()


def test_upload_rules_absent_without_uploads() -> None:
    engine = MappedValidationEngine({"avatar": "is_uploaded_file"})

    assert not engine.can_validate("avatar")
    assert engine.is_valid("avatar", "avatar")
    assert "is_file_type_valid" in engine.registry


def test_pair_validation_uses_field_as_upload(uploads, png_bytes) -> None:
    engine = MappedValidationEngine(
        {
            "file": "is_uploaded_file",
            "image": "is_uploaded_file_type_valid",
            "small": "is_file_not_too_large",
        },
        uploads=uploads,
        requirements=["avatar"],
    )

    assert engine.is_valid_pair("file", "avatar", "a.txt")
    assert not engine.is_valid_pair("file", "gone", "gone.pdf")
    assert engine.is_valid_pair("image", "avatar", "me.png", ["image/png"])
    assert not engine.is_valid_pair("image", "resume", "resume.txt", "image/*")
    assert not engine.is_valid_pair("small", "avatar", "me.png", len(png_bytes) - 1)
    assert engine.get_requirements() == {"avatar": True}
