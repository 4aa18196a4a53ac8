"""Concrete resolvers — ready-to-use ways of mapping a field to a rule name."""

import re
from collections.abc import Mapping
from typing import Any, Optional

from fieldcheck.validators.engine import ValidationEngine

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")


def snake_case(field: str) -> str:
    """'firstName', 'first-name' and 'First Name' all become 'first_name'."""
    text = _CAMEL_BOUNDARY.sub("_", field)
    return _SEPARATORS.sub("_", text).strip("_").lower()


class MappedValidationEngine(ValidationEngine):
    """Resolves fields through an explicit field → rule-name table.

    Usage:
        engine = MappedValidationEngine(
            {"email": "is_email", "birthday": "is_date"},
            requirements=["email"],
        )
    """

    def __init__(self, field_rules: Mapping[str, str], **kwargs: Any):
        self.field_rules = dict(field_rules)
        super().__init__(**kwargs)

    def get_rule_name(self, field: str) -> Optional[str]:
        return self.field_rules.get(field)


class ConventionValidationEngine(ValidationEngine):
    """Resolves a field to "validate_<snake_case field>".

    Subclasses provide the rules as @rule-marked methods:

        class SignupValidator(ConventionValidationEngine):
            @rule(message="{field} must be at least 18")
            def validate_age(self, value):
                return is_integer(value) and int(float(value)) >= 18
    """

    prefix = "validate_"

    def get_rule_name(self, field: str) -> Optional[str]:
        name = snake_case(field)
        return f"{self.prefix}{name}" if name else None
