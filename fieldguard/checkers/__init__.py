"""Per-field checkers, run by the engine in a fixed order: type, value, rights."""

from fieldguard.checkers.base import BaseChecker
from fieldguard.checkers.rights_checker import RightsChecker, check_rights
from fieldguard.checkers.type_checker import TypeChecker, check_type
from fieldguard.checkers.value_checker import ValueChecker

__all__ = [
    "BaseChecker",
    "RightsChecker",
    "TypeChecker",
    "ValueChecker",
    "check_rights",
    "check_type",
]
