"""Validation models — error kinds, roles, usage modes, options and results.

Everything here is plain data. Results are built fresh for every validation
call; nothing in this module holds shared mutable state.
"""

from enum import Enum, IntEnum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class ErrorKind(str, Enum):
    """Field-scoped validation failure kinds."""

    REQUIRED_FIELD_MISSING = "RequiredFieldMissing"
    TYPE_MISMATCH = "TypeMismatch"
    REGEX_MISMATCH = "RegexMismatch"
    OUT_OF_BOUNDARIES = "OutOfBoundaries"
    INSUFFICIENT_RIGHTS = "InsufficientRights"
    CUSTOM_VALIDATION_FAILED = "CustomValidationFailed"


class Role(IntEnum):
    """Caller authorization levels, totally ordered.

    NONE is never held by a caller; using it as a requirement disables a
    usage mode for a field.
    """

    UNAUTHENTICATED = 0
    USER = 1
    OWNER = 2
    ADMIN = 3
    NONE = 4

    @classmethod
    def parse(cls, value: Any) -> "Role":
        """Accept a Role, its integer value, or its case-insensitive name."""
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"unknown role {value!r}") from None
        return cls(value)


class Usage(IntEnum):
    """Operation context: document creation, read/projection, partial update."""

    INIT = 0
    GET = 1
    SET = 2

    @classmethod
    def parse(cls, value: Any) -> "Usage":
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"unknown usage {value!r}") from None
        return cls(value)


class Boundaries(BaseModel):
    """Inclusive numeric range."""

    min: float
    max: float

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _ordered(self) -> "Boundaries":
        if self.min > self.max:
            raise ValueError(f"boundaries min {self.min} is greater than max {self.max}")
        return self

    def contains(self, value: float) -> bool:
        try:
            return self.min <= value <= self.max
        except ArithmeticError:  # Decimal NaN refuses ordering
            return False


class Rights(BaseModel):
    """Minimum role required per usage mode."""

    init: Role = Role.UNAUTHENTICATED
    get: Role = Role.UNAUTHENTICATED
    set: Role = Role.UNAUTHENTICATED

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("init", "get", "set", mode="before")
    @classmethod
    def _coerce_role(cls, value: Any) -> Role:
        return Role.parse(value)

    @classmethod
    def of(cls, init: Any, get: Any, set: Any) -> "Rights":
        """Build from three positional roles, ordered Init, Get, Set."""
        return cls(init=init, get=get, set=set)

    @classmethod
    def locked(cls) -> "Rights":
        """No caller may touch the field in any usage mode."""
        return cls(init=Role.NONE, get=Role.NONE, set=Role.NONE)

    def for_usage(self, usage: Usage) -> Role:
        return (self.init, self.get, self.set)[Usage(usage)]


class ValidationError(BaseModel):
    """A single field-level validation finding."""

    kind: ErrorKind
    reason: str
    field: Optional[str] = None   # Dot-separated path of the offending field
    value: Any = None             # Offending value or its descriptive type

    model_config = {"use_enum_values": True}

    def __str__(self) -> str:
        return f"{self.kind} for {self.field} = {self.value}: {self.reason}"


class Options(BaseModel):
    """Per-call validation options."""

    usage: Usage = Usage.GET
    role: Role = Role.UNAUTHENTICATED
    args: Any = Field(default=None, description="Opaque value passed to default providers")

    model_config = {"frozen": True}

    @field_validator("usage", mode="before")
    @classmethod
    def _coerce_usage(cls, value: Any) -> Usage:
        return Usage.parse(value)

    @field_validator("role", mode="before")
    @classmethod
    def _coerce_role(cls, value: Any) -> Role:
        return Role.parse(value)


class ValidationResult(BaseModel):
    """Output of one validation pass: sanitized document plus every finding."""

    document: dict[str, Any] = Field(default_factory=dict)
    errors: list[ValidationError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def fields(self) -> set[str]:
        """Paths of every field that produced at least one error."""
        return {e.field for e in self.errors if e.field is not None}

    def error_payload(self) -> list[dict[str, Any]]:
        """Errors as plain dicts, ready for an API error response."""
        return [e.model_dump(exclude_none=True) for e in self.errors]
