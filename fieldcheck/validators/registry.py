"""Rule registry — maps rule names to predicates.

Lookups fail closed: an unknown name yields None, never an exception, so the
dispatcher can fall back to its fail-open policy.

Usage:
    registry = default_registry()

    @registry.register("is_postcode", message="{field} must be a postcode")
    def is_postcode(value):
        ...

    registry.get("is_postcode")(value)
"""

from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Optional

import structlog

from fieldcheck.validators import predicates
from fieldcheck.validators.uploads import is_file_type_valid

logger = structlog.get_logger()

Predicate = Callable[..., bool]

# Attribute set on methods marked with @rule
RULE_MARKER = "__fieldcheck_rule__"


@dataclass(frozen=True)
class Rule:
    """A named predicate, optionally with a failure message template.

    Field-aware dispatch (pair validation, field-and-value validators) calls
    field_predicate(field, value, *params) when the rule has one, and the
    predicate itself with the same arguments otherwise.
    """

    name: str
    predicate: Predicate
    message: Optional[str] = None
    field_predicate: Optional[Predicate] = None

    def __call__(self, *args: Any) -> bool:
        return bool(self.predicate(*args))

    def apply_to_field(self, field: str, value: Any, *params: Any) -> bool:
        return bool((self.field_predicate or self.predicate)(field, value, *params))

    def failure_message(self, field: str) -> Optional[str]:
        if self.message is None:
            return None
        return self.message.format(field=field)


class RuleRegistry:
    """Name → Rule table owned by one validator (or shared read-only)."""

    def __init__(self, rules: Optional[dict[str, Predicate]] = None):
        self._rules: dict[str, Rule] = {}
        for name, predicate in (rules or {}).items():
            self.register(name, predicate)

    def register(
        self,
        name: str,
        predicate: Optional[Predicate] = None,
        message: Optional[str] = None,
        field_predicate: Optional[Predicate] = None,
    ):
        """Register a predicate under name.

        Called without a predicate it returns a decorator instead.

        Args:
            name: Rule name the resolver will hand back for a field
            predicate: Callable returning a bool
            message: Optional failure message template; may use {field}
            field_predicate: Optional (field, value, *params) form for field-aware dispatch
        """
        if predicate is None:
            def decorator(func: Predicate) -> Predicate:
                self.register(name, func, message, field_predicate)
                return func
            return decorator

        if name in self._rules:
            logger.warning("rule_overwritten", rule=name)
        self._rules[name] = Rule(name=name, predicate=predicate, message=message, field_predicate=field_predicate)
        logger.debug("rule_registered", rule=name)
        return predicate

    def get(self, name: Optional[str]) -> Optional[Rule]:
        if not name:
            return None
        return self._rules.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def names(self) -> list[str]:
        return list(self._rules)

    def merge(self, other: "RuleRegistry") -> None:
        """Copy every rule from other into this registry; other wins on clashes."""
        for rule in other._rules.values():
            self.register(rule.name, rule.predicate, rule.message, rule.field_predicate)

    def copy(self) -> "RuleRegistry":
        clone = RuleRegistry()
        clone._rules = dict(self._rules)
        return clone


def ignore_field(predicate: Predicate) -> Predicate:
    """Adapt a value-only predicate to the (field, value, *params) call."""
    @wraps(predicate)
    def adapter(field: str, value: Any, *params: Any) -> bool:
        return predicate(value, *params)
    return adapter


def rule(name: Optional[str] = None, message: Optional[str] = None):
    """Mark a validator method as a rule.

    The method is registered, bound to its instance, when the validator is
    constructed. The rule name defaults to the method name.
    """
    def decorator(func: Predicate) -> Predicate:
        setattr(func, RULE_MARKER, (name or func.__name__, message))
        return func
    return decorator


CATALOGUE: dict[str, Predicate] = {
    "is_number": predicates.is_number,
    "is_integer": predicates.is_integer,
    "is_float": predicates.is_float,
    "is_positive": predicates.is_positive,
    "is_negative": predicates.is_negative,
    "is_zero": predicates.is_zero,
    "is_non_zero": predicates.is_non_zero,
    "is_string": predicates.is_string,
    "is_not_too_long": predicates.is_not_too_long,
    "is_empty": predicates.is_empty,
    "is_not_empty": predicates.is_not_empty,
    "is_empty_string": predicates.is_empty_string,
    "is_empty_array": predicates.is_empty_array,
    "is_date": predicates.is_date,
    "is_time": predicates.is_time,
    "is_email": predicates.is_email,
    "is_url": predicates.is_url,
    "is_file_type_valid": is_file_type_valid,
}


def default_registry() -> RuleRegistry:
    """Fresh registry holding the whole predicate catalogue."""
    registry = RuleRegistry()
    for name, predicate in CATALOGUE.items():
        registry.register(name, predicate, field_predicate=ignore_field(predicate))
    return registry
