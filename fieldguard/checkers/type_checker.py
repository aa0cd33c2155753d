"""Type Checker — matches runtime values against parsed type descriptors.

Identifier-typed fields travel as plain strings, so a string in the 24-hex
ObjectId form is accepted wherever ``ObjectId`` or ``string`` is declared.
"""

from typing import Any, Optional

from fieldguard.checkers.base import BaseChecker
from fieldguard.models import ErrorKind, Options, ValidationError
from fieldguard.schema import FieldRule
from fieldguard.types import (
    OBJECT_ID,
    SCALAR_KINDS,
    MappingType,
    ScalarType,
    SequenceType,
    TypeDescriptor,
    ValueKind,
    is_object_id,
    kind_name,
    kind_of,
)


def _scalar_matches(scalar: ScalarType, value: Any) -> bool:
    if scalar.name == OBJECT_ID:
        return is_object_id(value)
    return kind_of(value) is SCALAR_KINDS[scalar.name]


def check_type(descriptor: TypeDescriptor, value: Any) -> Optional[str]:
    """Return None when value conforms, else a description of the mismatch."""
    if isinstance(descriptor, ScalarType):
        if _scalar_matches(descriptor, value):
            return None
        return kind_name(value)

    if isinstance(descriptor, SequenceType):
        if kind_of(value) is not ValueKind.SEQUENCE:
            return kind_name(value)
        for item in value:
            if check_type(descriptor.item, item) is not None:
                return f"[] contains {kind_name(item)}"
        return None

    if isinstance(descriptor, MappingType):
        if kind_of(value) is not ValueKind.MAPPING:
            return kind_name(value)
        for key, item in value.items():
            if descriptor.key_kind == OBJECT_ID:
                if not is_object_id(key):
                    return f"one of the indexes at least is not valid ObjectId: {key}"
            elif not isinstance(key, str):
                return f"one of the indexes is of type: {type(key).__name__}"
            if check_type(descriptor.value, item) is not None:
                return f"one of the map values is of type: {kind_name(item)}"
        return None

    raise TypeError(f"unsupported descriptor {descriptor!r}")


class TypeChecker(BaseChecker):
    """Rejects values whose runtime shape does not match the declared type."""

    @property
    def name(self) -> str:
        return "TypeChecker"

    def check(self, rule: FieldRule, value: Any, options: Options) -> Optional[ValidationError]:
        mismatch = check_type(rule.type, value)
        if mismatch is None:
            return None
        return self._error(ErrorKind.TYPE_MISMATCH, "Type mismatch", rule, mismatch)
