"""Uploaded files — the upload accessor, MIME resolution, and file predicates.

MIME types come from content inspection when it is available and from the
filename extension otherwise. Sizes are always read from disk.
"""

import mimetypes
from collections.abc import Mapping
from functools import wraps
from pathlib import Path
from typing import Callable, Optional, Union

import structlog

from fieldcheck.config import get_settings
from fieldcheck.validators.errors import MimeTypeNotFound, NoExtension
from fieldcheck.validators.models import UploadedFile
from fieldcheck.validators.reference_data import (
    BINARY_MIME_TYPE,
    EMPTY_MIME_TYPE,
    MAGIC_BYTES,
    RIFF_SUBTYPES,
    TEXT_MIME_TYPE,
)

logger = structlog.get_logger()

PathLike = Union[str, Path]
MimeInspector = Callable[[Path], Optional[str]]


def inspect_content(path: PathLike) -> Optional[str]:
    """Identify a file's MIME type from its leading bytes.

    Returns None only when the file cannot be read.
    """
    try:
        with open(path, "rb") as handle:
            head = handle.read(get_settings().INSPECTION_BYTES)
    except OSError:
        return None

    if not head:
        return EMPTY_MIME_TYPE

    if head[:4] == b"RIFF" and head[8:12] in RIFF_SUBTYPES:
        return RIFF_SUBTYPES[head[8:12]]

    for signature, mime_type in MAGIC_BYTES:
        if head.startswith(signature):
            return mime_type

    if b"\x00" in head:
        return BINARY_MIME_TYPE
    try:
        head.decode("utf-8")
    except UnicodeDecodeError as e:
        # a multi-byte character cut off by the read limit is still text
        if e.start < len(head) - 3:
            return BINARY_MIME_TYPE
    return TEXT_MIME_TYPE


def resolve_mime_type(
    path: PathLike,
    filename: Optional[str] = None,
    inspector: Optional[MimeInspector] = None,
    content_inspection: Optional[bool] = None,
) -> str:
    """Resolve the MIME type of the file at path.

    Args:
        path: File on disk (for uploads, the temporary path)
        filename: Name to take the extension from; defaults to the path's name
        inspector: Content inspector; defaults to inspect_content
        content_inspection: Whether inspection is available; defaults to settings

    Raises:
        NoExtension: Extension lookup was needed and the name has none
        MimeTypeNotFound: No type could be identified
    """
    if content_inspection is None:
        content_inspection = get_settings().CONTENT_INSPECTION

    if content_inspection:
        mime_type = (inspector or inspect_content)(Path(path))
        if not mime_type:
            raise MimeTypeNotFound(f"Unable to identify MIME type of {path}", path)
        logger.debug("mime_type_resolved", path=str(path), mime_type=mime_type, method="content")
        return mime_type

    name = filename or Path(path).name
    if not Path(name).suffix:
        raise NoExtension(f"Unable to find extension for {name}", name)

    mime_type, _ = mimetypes.guess_type(name, strict=False)
    if mime_type is None:
        raise MimeTypeNotFound(f"Unable to identify MIME type of {name}", name)

    logger.debug("mime_type_resolved", path=str(path), mime_type=mime_type, method="extension")
    return mime_type


def use_field_as_upload(check: Callable[..., bool]) -> Callable[..., bool]:
    """Adapt an upload check to the (field, value, *params) call.

    The field names the upload; the submitted value (usually the client
    filename) is ignored.
    """
    @wraps(check)
    def adapter(field: str, value, *params) -> bool:
        return check(field, *params)
    return adapter


def _type_matches(mime_type: str, valid_type: str) -> bool:
    if valid_type.endswith("/*"):
        return mime_type.split("/")[0] == valid_type[:-2]
    return mime_type == valid_type


def is_file_type_valid(
    path: PathLike,
    valid_types: Union[str, list[str], tuple[str, ...], set[str]],
    filename: Optional[str] = None,
    inspector: Optional[MimeInspector] = None,
    content_inspection: Optional[bool] = None,
) -> bool:
    """True when the file's MIME type is one of valid_types ("image/*" allowed)."""
    if isinstance(valid_types, str):
        valid_types = [valid_types]
    mime_type = resolve_mime_type(path, filename, inspector, content_inspection)
    return any(_type_matches(mime_type, valid_type) for valid_type in valid_types)


class UploadRegistry:
    """Read-only view of the files uploaded for one request, keyed by field."""

    def __init__(
        self,
        files: Optional[Mapping[str, Union[UploadedFile, dict]]] = None,
        inspector: Optional[MimeInspector] = None,
        content_inspection: Optional[bool] = None,
    ):
        self._files: dict[str, UploadedFile] = {
            field: upload if isinstance(upload, UploadedFile) else UploadedFile(**upload)
            for field, upload in (files or {}).items()
        }
        self.inspector = inspector
        self.content_inspection = content_inspection

    def get(self, field: str) -> Optional[UploadedFile]:
        return self._files.get(field)

    def __contains__(self, field: object) -> bool:
        return field in self._files

    def fields(self) -> list[str]:
        return list(self._files)

    def rules(self) -> dict[str, Callable[..., bool]]:
        """Upload checks by rule name; each takes the upload's field first."""
        return {
            "is_uploaded_file": self.is_uploaded_file,
            "is_file_not_too_large": self.is_file_not_too_large,
            "is_uploaded_file_type_valid": self.is_uploaded_file_type_valid,
        }

    def is_uploaded_file(self, field: str) -> bool:
        """True when a file was received for field and is still on disk."""
        upload = self.get(field)
        return upload is not None and upload.temporary_path.is_file()

    def is_file_not_too_large(self, field: str, max_size: int) -> bool:
        """Compare the on-disk size with max_size, ignoring the declared size."""
        if not self.is_uploaded_file(field):
            return False
        return self._files[field].temporary_path.stat().st_size <= max_size

    def is_uploaded_file_type_valid(self, field: str, valid_types) -> bool:
        if not self.is_uploaded_file(field):
            return False
        upload = self._files[field]
        return is_file_type_valid(
            upload.temporary_path,
            valid_types,
            filename=upload.original_filename or None,
            inspector=self.inspector,
            content_inspection=self.content_inspection,
        )
