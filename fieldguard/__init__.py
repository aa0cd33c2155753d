"""fieldguard — schema-driven document validation with field access control.

Usage:
    from fieldguard import Options, Role, Schema, Usage, validate

    schema = Schema.from_definitions({
        "name": {"type": "string", "required": True},
        "age": {"type": "number", "boundaries": {"min": 0, "max": 120}},
    })
    result = validate(schema, document, Options(usage=Usage.INIT, role=Role.USER))
"""

from fieldguard.engine import ValidationEngine, validate, validation_engine
from fieldguard.exceptions import (
    DuplicateFieldError,
    InvalidPatternError,
    InvalidTypeDescriptorError,
    MalformedPathError,
    SchemaDefinitionError,
)
from fieldguard.loader import load_schema
from fieldguard.models import (
    Boundaries,
    ErrorKind,
    Options,
    Rights,
    Role,
    Usage,
    ValidationError,
    ValidationResult,
)
from fieldguard.schema import FieldRule, Schema
from fieldguard.types import parse_descriptor

__all__ = [
    "ValidationEngine",
    "validation_engine",
    "validate",
    "Schema",
    "FieldRule",
    "load_schema",
    "parse_descriptor",
    "Boundaries",
    "ErrorKind",
    "Options",
    "Rights",
    "Role",
    "Usage",
    "ValidationError",
    "ValidationResult",
    "SchemaDefinitionError",
    "MalformedPathError",
    "InvalidPatternError",
    "InvalidTypeDescriptorError",
    "DuplicateFieldError",
]
