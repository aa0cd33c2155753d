"""Base checker — abstract class implementing the Strategy Pattern.

The engine runs checkers as an ordered chain for every present field. The
first checker that reports an error ends the chain for that field.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from fieldguard.models import ErrorKind, Options, ValidationError
from fieldguard.schema import FieldRule


class BaseChecker(ABC):
    """Abstract base for per-field checkers.

    Contract:
        - check() is pure: same rule, value and options give the same outcome
        - check() returns None when the value passes, otherwise one error
        - No I/O, no shared mutable state
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logging."""
        ...

    @abstractmethod
    def check(self, rule: FieldRule, value: Any, options: Options) -> Optional[ValidationError]:
        """Check one present field value.

        Args:
            rule: The field's rule
            value: Runtime value read from the document (never absent)
            options: Usage mode, caller role and default-provider args

        Returns:
            None on success, or the ValidationError describing the failure
        """
        ...

    # ── Helper Methods ──

    def _error(
        self,
        kind: ErrorKind,
        reason: str,
        rule: FieldRule,
        value: Any = None,
    ) -> ValidationError:
        """Convenience method to create a ValidationError for rule's field."""
        return ValidationError(kind=kind, reason=reason, field=rule.path, value=value)
