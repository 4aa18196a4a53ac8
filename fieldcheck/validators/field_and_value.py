"""Field-and-value validator — rules that need to know which field they check."""

from typing import Any

import structlog

from fieldcheck.validators.base import AbstractValidator
from fieldcheck.validators.errors import UnableToIdentifyField
from fieldcheck.validators.predicates import is_array, iterate_array
from fieldcheck.validators.registry import Rule

logger = structlog.get_logger()


class AbstractFieldAndValueValidator(AbstractValidator):
    """Like AbstractValidator, but every rule is called as rule(field, value, *params)."""

    def is_valid(self, field: str, value: Any, *params: Any) -> bool:
        if not self.can_validate(field):
            logger.debug("rule_not_found", field=field)
            return True

        rule = self._find_rule(field)
        if is_array(value):
            # the array walker needs the field too; it travels as the first parameter
            return self._is_valid_array(value, rule, field, *params)
        return rule.apply_to_field(field, value, *params)

    def _is_valid_array(self, values: Any, rule: Rule, *params: Any) -> bool:
        """Apply rule to each element as rule(field, element, *rest).

        Raises:
            UnableToIdentifyField: params is empty or its first item isn't a string
        """
        if not params:
            raise UnableToIdentifyField(
                f"{type(self).__name__}._is_valid_array must be sent the field as its first parameter"
            )

        field, *rest = params
        if not isinstance(field, str):
            raise UnableToIdentifyField(f"Invalid field: {field!r}", field)

        for value in iterate_array(values):
            if not rule.apply_to_field(field, value, *rest):
                return False
        return True
