"""Dynamic values and the type descriptor grammar.

Documents arrive already decoded into plain Python values. ``kind_of`` tags
each value with a ValueKind; type descriptors are parsed once from their
compact text form into a small recursive structure:

    descriptor := scalar | "[]" descriptor | "map[" keykind "]" descriptor
    scalar     := string | number | bool | ObjectId
    keykind    := string | ObjectId
"""

import numbers
import re
from collections.abc import Mapping, Sequence
from decimal import Decimal
from enum import Enum
from functools import lru_cache
from typing import Any, Literal, Union

from pydantic import BaseModel

from fieldguard.exceptions import InvalidTypeDescriptorError


class ValueKind(str, Enum):
    """Runtime tag of a decoded document value."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    UNKNOWN = "unknown"


def kind_of(value: Any) -> ValueKind:
    """Tag a decoded value. bool is checked before int on purpose."""
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (numbers.Real, Decimal)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return ValueKind.SEQUENCE
    return ValueKind.UNKNOWN


def kind_name(value: Any) -> str:
    """Descriptive runtime type name used in diagnostics."""
    kind = kind_of(value)
    if kind is ValueKind.UNKNOWN:
        return type(value).__name__
    return kind.value


# ── Identifier type ──

OBJECT_ID = "ObjectId"

_OBJECT_ID_RE = re.compile(r"[0-9a-fA-F]{24}")


def is_object_id(value: Any) -> bool:
    """True for strings in the 24-hex-character identifier form."""
    return isinstance(value, str) and _OBJECT_ID_RE.fullmatch(value) is not None


# ── Descriptors ──

ScalarName = Literal["string", "number", "bool", "ObjectId"]
KeyKind = Literal["string", "ObjectId"]

SCALAR_KINDS: dict[str, ValueKind] = {
    "string": ValueKind.STRING,
    "number": ValueKind.NUMBER,
    "bool": ValueKind.BOOL,
    OBJECT_ID: ValueKind.STRING,
}

# Legacy wire names still found in older schema declarations
SCALAR_ALIASES = {
    "boolean": "bool",
    "float64": "number",
    "json.Number": "number",
    "int": "number",
    "bson.ObjectId": OBJECT_ID,
}


class ScalarType(BaseModel):
    name: ScalarName

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return self.name


class SequenceType(BaseModel):
    item: "TypeDescriptor"

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"[]{self.item}"


class MappingType(BaseModel):
    key_kind: KeyKind = "string"
    value: "TypeDescriptor"

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"map[{self.key_kind}]{self.value}"


TypeDescriptor = Union[ScalarType, SequenceType, MappingType]

SequenceType.model_rebuild()
MappingType.model_rebuild()


def _scalar_name(text: str, descriptor: str) -> str:
    name = SCALAR_ALIASES.get(text, text)
    if name not in SCALAR_KINDS:
        raise InvalidTypeDescriptorError(descriptor, f"unknown scalar type {text!r}")
    return name


def parse_descriptor(descriptor: str) -> TypeDescriptor:
    """Parse descriptor text such as ``[]map[ObjectId]number``.

    Raises:
        InvalidTypeDescriptorError: if the text does not follow the grammar
    """
    if not isinstance(descriptor, str):
        raise InvalidTypeDescriptorError(
            repr(descriptor), f"expected descriptor text, got {type(descriptor).__name__}"
        )
    if not descriptor.strip():
        raise InvalidTypeDescriptorError(descriptor, "descriptor is empty")
    return _parse_cached(descriptor)


@lru_cache(maxsize=256)
def _parse_cached(descriptor: str) -> TypeDescriptor:
    return _parse(descriptor.strip(), descriptor)


def _parse(text: str, descriptor: str) -> TypeDescriptor:
    if text.startswith("[]"):
        rest = text[2:]
        if not rest:
            raise InvalidTypeDescriptorError(descriptor, "sequence without element type")
        return SequenceType(item=_parse(rest, descriptor))

    if text.startswith("map["):
        close = text.find("]")
        if close < 0:
            raise InvalidTypeDescriptorError(descriptor, "unterminated map key")
        key = _scalar_name(text[4:close], descriptor)
        if key not in ("string", OBJECT_ID):
            raise InvalidTypeDescriptorError(descriptor, f"map keys cannot be {key!r}")
        rest = text[close + 1:]
        if not rest:
            raise InvalidTypeDescriptorError(descriptor, "map without value type")
        return MappingType(key_kind=key, value=_parse(rest, descriptor))

    return ScalarType(name=_scalar_name(text, descriptor))


def as_descriptor(value: Union[str, TypeDescriptor]) -> TypeDescriptor:
    """Accept descriptor text or an already-parsed descriptor."""
    if isinstance(value, (ScalarType, SequenceType, MappingType)):
        return value
    return parse_descriptor(value)
