"""Field validators — resolve a field to a rule, apply it, track completeness.

Usage:
    from fieldcheck.validators import MappedValidationEngine

    engine = MappedValidationEngine({"email": "is_email"}, requirements=["email"])
    engine.is_valid("email", "someone@example.com")
    engine.is_complete()
"""

from fieldcheck.validators.base import AbstractValidator, ValidatorInterface
from fieldcheck.validators.engine import FieldAndValueValidationEngine, ValidationEngine
from fieldcheck.validators.errors import (
    ErrorCode,
    InvalidRequirement,
    MimeTypeNotFound,
    NoExtension,
    UnableToIdentifyField,
    UnknownField,
    ValidatorException,
)
from fieldcheck.validators.field_and_value import AbstractFieldAndValueValidator
from fieldcheck.validators.models import UploadedFile, ValidationReport
from fieldcheck.validators.registry import Rule, RuleRegistry, default_registry, rule
from fieldcheck.validators.resolvers import ConventionValidationEngine, MappedValidationEngine
from fieldcheck.validators.uploads import UploadRegistry, resolve_mime_type

__all__ = [
    "ValidatorInterface",
    "AbstractValidator",
    "AbstractFieldAndValueValidator",
    "ValidationEngine",
    "FieldAndValueValidationEngine",
    "MappedValidationEngine",
    "ConventionValidationEngine",
    "Rule",
    "RuleRegistry",
    "default_registry",
    "rule",
    "UploadRegistry",
    "UploadedFile",
    "ValidationReport",
    "resolve_mime_type",
    "ErrorCode",
    "ValidatorException",
    "InvalidRequirement",
    "UnknownField",
    "NoExtension",
    "MimeTypeNotFound",
    "UnableToIdentifyField",
]
