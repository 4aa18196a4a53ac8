"""Validation models — uploaded-file metadata and the completeness report."""

from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field


class UploadedFile(BaseModel):
    """One file received for a field.

    size_bytes is whatever the client declared. Size checks read the file on
    disk instead and never trust this number.
    """

    temporary_path: Path
    original_filename: str = ""
    size_bytes: Optional[int] = Field(default=None, description="Client-declared size, informational only")

    @property
    def extension(self) -> str:
        """Lowercase extension of the original filename, without the dot."""
        return Path(self.original_filename).suffix.lstrip(".").lower()


class ValidationReport(BaseModel):
    """Snapshot of an engine's messages and requirement progress."""

    complete: bool = Field(description="True once every required field has validated")
    messages: dict[str, str] = Field(default_factory=dict)
    requirements: dict[str, bool] = Field(default_factory=dict)
    missing: list[str] = Field(default_factory=list, description="Required fields not yet satisfied")

    @classmethod
    def build(cls, messages: dict[str, str], requirements: dict[str, bool], complete: bool) -> "ValidationReport":
        """Build a report from copies of the message table and requirement set."""
        return cls(
            complete=complete,
            messages=dict(messages),
            requirements=dict(requirements),
            missing=[field for field, satisfied in requirements.items() if not satisfied],
        )
