"""Value Checker — pattern, boundaries and custom predicates.

Runs only after the type check passed. Order is fixed: pattern, then
boundaries, then the rule's custom check; the first failure wins.
"""

from typing import Any, Optional

import structlog

from fieldguard.checkers.base import BaseChecker
from fieldguard.models import ErrorKind, Options, ValidationError
from fieldguard.schema import FieldRule
from fieldguard.types import ValueKind, kind_of

logger = structlog.get_logger()


class ValueChecker(BaseChecker):
    """Validates the content of a correctly-typed value."""

    @property
    def name(self) -> str:
        return "ValueChecker"

    def check(self, rule: FieldRule, value: Any, options: Options) -> Optional[ValidationError]:
        kind = kind_of(value)

        # ── 1. Pattern ──
        if kind is ValueKind.STRING and rule.pattern is not None:
            if rule.pattern.fullmatch(value) is None:
                return self._error(ErrorKind.REGEX_MISMATCH, "Regex not match", rule, value)

        # ── 2. Boundaries ──
        if kind is ValueKind.NUMBER and rule.boundaries is not None:
            if not rule.boundaries.contains(value):
                return self._error(ErrorKind.OUT_OF_BOUNDARIES, "Out of boundaries", rule, value)

        # ── 3. Custom check ──
        if rule.custom_check is not None:
            return self._run_custom_check(rule, value)

        return None

    def _run_custom_check(self, rule: FieldRule, value: Any) -> Optional[ValidationError]:
        """Run the rule's predicate and normalize its outcome."""
        try:
            outcome = rule.custom_check(value)
        except Exception as e:
            logger.error("custom_check_failed", field=rule.path, error=str(e))
            return self._error(
                ErrorKind.CUSTOM_VALIDATION_FAILED,
                f"Custom check raised {type(e).__name__}: {e}",
                rule,
                value,
            )

        if isinstance(outcome, tuple):
            passed, error = outcome
        else:
            passed, error = outcome, None

        if passed:
            return None
        if error is None:
            return self._error(ErrorKind.CUSTOM_VALIDATION_FAILED, "Custom check failed", rule, value)
        # Predicates may omit or misname the field; the rule's path is authoritative
        if error.field != rule.path:
            error = error.model_copy(update={"field": rule.path})
        return error
