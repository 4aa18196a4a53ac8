"""Validator exceptions — configuration errors and unresolvable input.

Absence of a rule for a field is never an error; see AbstractValidator.is_valid.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Codes carried by every ValidatorException."""

    NO_EXTENSION = "NO_EXTENSION"
    MIME_TYPE_NOT_FOUND = "MIME_TYPE_NOT_FOUND"
    UNABLE_TO_IDENTIFY_FIELD = "UNABLE_TO_IDENTIFY_FIELD"
    INVALID_REQUIREMENT = "INVALID_REQUIREMENT"
    UNKNOWN_FIELD = "UNKNOWN_FIELD"


class ValidatorException(Exception):
    """Base class for everything the validators raise."""

    code: ErrorCode

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.message = message
        self.value = value

    def __str__(self) -> str:
        return self.message


class InvalidRequirement(ValidatorException):
    """A requirement name was empty, numeric, or not a string."""

    code = ErrorCode.INVALID_REQUIREMENT


class UnknownField(ValidatorException, KeyError):
    """A message was requested for a field that was never seeded."""

    code = ErrorCode.UNKNOWN_FIELD


class NoExtension(ValidatorException):
    """Extension-based MIME lookup had no extension to work with."""

    code = ErrorCode.NO_EXTENSION


class MimeTypeNotFound(ValidatorException):
    """Neither content inspection nor the extension identified a type."""

    code = ErrorCode.MIME_TYPE_NOT_FOUND


class UnableToIdentifyField(ValidatorException):
    """A field-aware array check was not told which field it validates."""

    code = ErrorCode.UNABLE_TO_IDENTIFY_FIELD
