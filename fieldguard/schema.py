"""Field rules and schemas.

A Schema is built once, typically at import or startup, and shared by every
validation call. Descriptors are parsed and patterns compiled while building,
so a broken declaration fails here with a SchemaDefinitionError instead of in
the middle of validating some unrelated document.

Default providers and custom checks must be pure: they are invoked
concurrently from any thread that validates against the schema.
"""

import re
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Callable, Optional, Union

import structlog
from pydantic import BaseModel, field_validator
from pydantic import ValidationError as PydanticValidationError

from fieldguard.exceptions import (
    DuplicateFieldError,
    InvalidPatternError,
    SchemaDefinitionError,
)
from fieldguard.models import Boundaries, Rights, ValidationError
from fieldguard.paths import split_path
from fieldguard.types import TypeDescriptor, as_descriptor

logger = structlog.get_logger()

DefaultProvider = Callable[[Any], Any]
CheckOutcome = Union[bool, tuple[bool, Optional[ValidationError]]]
CustomCheck = Callable[[Any], CheckOutcome]


class FieldRule(BaseModel):
    """Everything the engine knows about one field path."""

    path: str
    type: TypeDescriptor
    pattern: Optional[re.Pattern] = None
    boundaries: Optional[Boundaries] = None
    rights: Rights = Rights()
    required: bool = False                       # Init only
    default: Optional[DefaultProvider] = None    # Init only, when absent and not required
    custom_check: Optional[CustomCheck] = None

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @field_validator("path")
    @classmethod
    def _addressable(cls, path: str) -> str:
        split_path(path)
        return path

    @classmethod
    def declare(
        cls,
        path: str,
        type: Union[str, TypeDescriptor] = "string",
        pattern: Optional[Union[str, re.Pattern]] = None,
        boundaries: Optional[Union[Boundaries, Mapping, tuple]] = None,
        rights: Optional[Union[Rights, Mapping, Iterable]] = None,
        required: bool = False,
        default: Optional[DefaultProvider] = None,
        custom_check: Optional[CustomCheck] = None,
    ) -> "FieldRule":
        """Build a rule from loose declaration values.

        Args:
            path: Dot-separated field path
            type: Descriptor text (``"[]string"``) or a parsed descriptor
            pattern: Regular expression the whole string value must match
            boundaries: Boundaries, ``{"min": .., "max": ..}`` or ``(min, max)``
            rights: Rights, ``{"init": .., "get": .., "set": ..}`` or three
                roles ordered Init, Get, Set
            required: Whether Init must supply the field
            default: Provider called with Options.args when absent on Init
            custom_check: Predicate run after the built-in value checks

        Raises:
            MalformedPathError, InvalidPatternError, InvalidTypeDescriptorError,
            SchemaDefinitionError
        """
        split_path(path)
        fields = dict(
            path=path,
            type=as_descriptor(type),
            pattern=_compile(path, pattern),
            boundaries=_boundaries(path, boundaries),
            rights=_rights(path, rights),
            required=required,
            default=default,
            custom_check=custom_check,
        )
        try:
            return cls(**fields)
        except PydanticValidationError as e:
            raise SchemaDefinitionError(f"invalid declaration for field {path!r}: {e}") from e


def _compile(path: str, pattern: Optional[Union[str, re.Pattern]]) -> Optional[re.Pattern]:
    if pattern is None or isinstance(pattern, re.Pattern):
        return pattern
    if not isinstance(pattern, str):
        raise InvalidPatternError(path, pattern, TypeError(f"expected a string, got {type(pattern).__name__}"))
    try:
        return re.compile(pattern)
    except (re.error, TypeError) as e:
        raise InvalidPatternError(path, pattern, e) from e


def _boundaries(path: str, value: Any) -> Optional[Boundaries]:
    if value is None or isinstance(value, Boundaries):
        return value
    try:
        if isinstance(value, Mapping):
            return Boundaries(**value)
        low, high = value
        return Boundaries(min=low, max=high)
    except (TypeError, ValueError) as e:
        raise SchemaDefinitionError(f"invalid boundaries for field {path!r}: {e}") from e


def _rights(path: str, value: Any) -> Rights:
    if value is None:
        return Rights()
    if isinstance(value, Rights):
        return value
    try:
        if isinstance(value, Mapping):
            return Rights(**value)
        init, get, set_ = value
        return Rights.of(init, get, set_)
    except (TypeError, ValueError) as e:
        raise SchemaDefinitionError(f"invalid rights for field {path!r}: {e}") from e


class Schema:
    """Immutable, ordered collection of field rules with unique paths."""

    __slots__ = ("_rules", "_by_path")

    def __init__(self, rules: Iterable[FieldRule]):
        ordered: list[FieldRule] = []
        by_path: dict[str, FieldRule] = {}
        for rule in rules:
            if rule.path in by_path:
                raise DuplicateFieldError(rule.path)
            by_path[rule.path] = rule
            ordered.append(rule)
        object.__setattr__(self, "_rules", tuple(ordered))
        object.__setattr__(self, "_by_path", by_path)
        logger.debug("schema_built", rules=len(ordered))

    @classmethod
    def from_definitions(cls, definitions: Mapping[str, Union[FieldRule, Mapping[str, Any]]]) -> "Schema":
        """Build from ``{path: declaration}``, e.g. ``{"age": {"type": "number"}}``."""
        rules = []
        for path, declaration in definitions.items():
            if isinstance(declaration, FieldRule):
                if declaration.path != path:
                    raise SchemaDefinitionError(
                        f"rule for {declaration.path!r} registered under {path!r}"
                    )
                rules.append(declaration)
            else:
                rules.append(FieldRule.declare(path, **declaration))
        return cls(rules)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Schema is immutable")

    def __iter__(self) -> Iterator[FieldRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, path: object) -> bool:
        return path in self._by_path

    def __getitem__(self, path: str) -> FieldRule:
        return self._by_path[path]

    @property
    def paths(self) -> tuple[str, ...]:
        return tuple(r.path for r in self._rules)

    def __repr__(self) -> str:
        return f"Schema({list(self.paths)!r})"
