"""Rights Checker — role-based access per usage mode."""

from typing import Any, Optional

from fieldguard.checkers.base import BaseChecker
from fieldguard.models import ErrorKind, Options, Role, ValidationError
from fieldguard.schema import FieldRule


def check_rights(required: Role, role: Role) -> bool:
    """True when the caller's role meets the requirement."""
    return Role(role) >= Role(required)


class RightsChecker(BaseChecker):
    """Rejects fields the caller may not touch in the current usage mode."""

    @property
    def name(self) -> str:
        return "RightsChecker"

    def check(self, rule: FieldRule, value: Any, options: Options) -> Optional[ValidationError]:
        required = rule.rights.for_usage(options.usage)
        if check_rights(required, options.role):
            return None
        return self._error(ErrorKind.INSUFFICIENT_RIGHTS, "Insufficient rights", rule)
