"""Base validator — resolves a field to a rule and applies it.

Concrete validators supply get_rule_name(); everything else (rule lookup,
scalar/array dispatch, the fail-open policy) lives here.
"""

import inspect
from abc import ABC, abstractmethod
from typing import Any, Optional

import structlog

from fieldcheck.validators.predicates import is_array, iterate_array
from fieldcheck.validators.registry import RULE_MARKER, Predicate, Rule, RuleRegistry, default_registry
from fieldcheck.validators.uploads import UploadRegistry, use_field_as_upload

logger = structlog.get_logger()


class ValidatorInterface(ABC):
    """What callers of any validator rely on."""

    @abstractmethod
    def can_validate(self, field: str) -> bool:
        """Return True if this object can validate data labeled by field."""
        ...

    @abstractmethod
    def is_valid(self, field: str, value: Any, *params: Any) -> bool:
        """Return True if value passes the rule selected by its field label."""
        ...

    @abstractmethod
    def is_valid_pair(self, pair: str, field: str, value: Any, *params: Any) -> bool:
        """Return True if value is valid for field, using pair to select the rule.

        Sometimes a value's validity depends on its field; the rule found for
        pair receives both field and value.
        """
        ...


class AbstractValidator(ValidatorInterface):
    """Stateless dispatcher over a per-instance RuleRegistry.

    Rules come from, in order (later wins): the predicate catalogue, upload
    checks when an UploadRegistry is given, methods marked with @rule, and the
    rules mapping passed in.
    """

    def __init__(
        self,
        rules: Optional[dict[str, Predicate]] = None,
        uploads: Optional[UploadRegistry] = None,
        registry: Optional[RuleRegistry] = None,
    ):
        self.uploads = uploads
        self.registry = registry.copy() if registry is not None else default_registry()

        if uploads is not None:
            for name, check in uploads.rules().items():
                self.registry.register(name, check, field_predicate=use_field_as_upload(check))

        for attribute, func in inspect.getmembers(type(self), predicate=inspect.isfunction):
            marker = getattr(func, RULE_MARKER, None)
            if marker is not None:
                name, message = marker
                self.registry.register(name, getattr(self, attribute), message)

        for name, predicate in (rules or {}).items():
            self.registry.register(name, predicate)

    @abstractmethod
    def get_rule_name(self, field: str) -> Optional[str]:
        """Name of the rule that validates data labeled by field, or None."""
        ...

    def _find_rule(self, field: str) -> Optional[Rule]:
        return self.registry.get(self.get_rule_name(field))

    def can_validate(self, field: str) -> bool:
        return self._find_rule(field) is not None

    def is_valid(self, field: str, value: Any, *params: Any) -> bool:
        # fail open: a field without a rule is never reported invalid
        if not self.can_validate(field):
            logger.debug("rule_not_found", field=field)
            return True

        rule = self._find_rule(field)
        if is_array(value):
            return self._is_valid_array(value, rule, *params)
        return rule(value, *params)

    def is_valid_pair(self, pair: str, field: str, value: Any, *params: Any) -> bool:
        if not self.can_validate(pair):
            logger.debug("rule_not_found", field=field, pair=pair)
            return True

        rule = self._find_rule(pair)
        if is_array(value):
            return all(rule.apply_to_field(field, element, *params) for element in iterate_array(value))
        return rule.apply_to_field(field, value, *params)

    def _is_valid_array(self, values: Any, rule: Rule, *params: Any) -> bool:
        """Apply rule to each element in order, stopping at the first failure."""
        for value in iterate_array(values):
            if not rule(value, *params):
                return False
        return True
