"""Validation Engine — dispatch plus per-session messages and requirements.

One engine instance belongs to one data set (one form submission, one
request). It owns a message table and a requirement set and never resets
them on its own; only set_requirements() replaces the requirement set.

Usage:
    engine = MappedValidationEngine({"email": "is_email", "age": "is_positive"})
    engine.set_requirements(["email", "age"])
    engine.is_valid("email", "someone@example.com")
    engine.is_valid("age", "42")
    engine.is_complete()    # True
"""

from collections.abc import Iterable, Mapping
from typing import Any, Optional

import structlog

from fieldcheck.config import get_settings
from fieldcheck.validators.base import AbstractValidator
from fieldcheck.validators.errors import InvalidRequirement, UnknownField
from fieldcheck.validators.field_and_value import AbstractFieldAndValueValidator
from fieldcheck.validators.models import ValidationReport
from fieldcheck.validators.predicates import is_number

logger = structlog.get_logger()


class ValidationEngine(AbstractValidator):
    """AbstractValidator that also records messages and requirement progress.

    Messages:
        A field gets the default "valid" message the first time can_validate()
        finds a rule for it. Rules overwrite it to describe a failure, either
        through a message template on the Rule or by calling _set_message().

    Requirements:
        set_requirements() declares the required fields, all unsatisfied.
        A successful is_valid() for a required field satisfies it for good;
        failures never unsatisfy it.
    """

    def __init__(
        self,
        requirements: Optional[Iterable[str]] = None,
        default_message: Optional[str] = None,
        **kwargs: Any,
    ):
        """Initialize engine state, then the rule registry.

        Args:
            requirements: Optional required field names, as for set_requirements()
            default_message: Seeded message; defaults to settings.DEFAULT_VALID_MESSAGE
            **kwargs: rules, uploads, registry; see AbstractValidator
        """
        self._messages: dict[str, str] = {}
        self._requirements: dict[str, bool] = {}
        self.default_message = default_message or get_settings().DEFAULT_VALID_MESSAGE
        super().__init__(**kwargs)

        if requirements is not None:
            self.set_requirements(requirements)

    # ── Requirements ──

    def set_requirements(self, fields: Iterable[str]) -> None:
        """Replace the requirement set; every field starts unsatisfied.

        Raises:
            InvalidRequirement: fields is a bare string, or a name is not a
                string, is empty, or is numeric
        """
        if isinstance(fields, str):
            raise InvalidRequirement(f"Requirements must be a sequence of names, not {fields!r}", fields)

        fields = list(fields)
        for field in fields:
            if not isinstance(field, str) or not field.strip() or is_number(field):
                raise InvalidRequirement(f"Invalid requirement: {field!r}", field)

        self._requirements = {field: False for field in fields}
        logger.info("requirements_set", fields=fields)

    def get_requirements(self) -> dict[str, bool]:
        return dict(self._requirements)

    def missing_requirements(self) -> list[str]:
        """Required fields not yet validated, in declaration order."""
        return [field for field, satisfied in self._requirements.items() if not satisfied]

    def is_complete(self) -> bool:
        # Exactly one distinct flag, and it's True. An empty requirement set
        # has no distinct flags, so an unconfigured engine is never complete.
        return set(self._requirements.values()) == {True}

    # ── Validation ──

    def can_validate(self, field: str) -> bool:
        found = super().can_validate(field)
        if found and field not in self._messages:
            self._messages[field] = self.default_message
        return found

    def is_valid(self, field: str, value: Any, *params: Any) -> bool:
        valid = super().is_valid(field, value, *params)
        self._record(field, field, valid)
        return valid

    def is_valid_pair(self, pair: str, field: str, value: Any, *params: Any) -> bool:
        if self.can_validate(pair) and field not in self._messages:
            self._messages[field] = self.default_message

        valid = super().is_valid_pair(pair, field, value, *params)
        self._record(pair, field, valid)
        return valid

    def validate(self, data: Mapping[str, Any]) -> ValidationReport:
        """Validate every item of a flat mapping and report.

        Every field is checked; one failure doesn't stop the others.
        """
        for field, value in data.items():
            self.is_valid(field, value)
        return self.report()

    def _record(self, key: str, field: str, valid: bool) -> None:
        if valid:
            if field in self._requirements:
                self._requirements[field] = True
        else:
            rule = self._find_rule(key)
            message = rule.failure_message(field) if rule is not None else None
            if message is not None:
                self._messages[field] = message

        logger.debug("field_validated", field=field, rule_key=key, valid=valid)

    # ── Messages ──

    def _set_message(self, field: str, message: str) -> None:
        """Describe the outcome for field; for use inside rule methods."""
        self._messages[field] = message

    def get_validation_messages(self) -> dict[str, str]:
        return dict(self._messages)

    def get_validation_message(self, field: str) -> str:
        """Message recorded for field.

        Raises:
            UnknownField: field was never recognized as validatable
        """
        try:
            return self._messages[field]
        except KeyError:
            raise UnknownField(f"Unknown field: {field}", field) from None

    def report(self) -> ValidationReport:
        return ValidationReport.build(self._messages, self._requirements, complete=self.is_complete())


class FieldAndValueValidationEngine(ValidationEngine, AbstractFieldAndValueValidator):
    """ValidationEngine whose rules receive (field, value, *params)."""
