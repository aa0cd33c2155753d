"""Schema definition errors — raised when a schema itself is broken.

These never describe bad input data. Field-level failures are collected as
ValidationError records (see fieldguard.models); the exceptions below signal
a defect in how the schema was declared and are raised when the schema is
built.
"""


class SchemaDefinitionError(ValueError):
    """Base class for every schema construction defect."""


class MalformedPathError(SchemaDefinitionError):
    """A field path cannot address a location in a document."""

    def __init__(self, path: str, reason: str = "malformed field path"):
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path!r}")


class InvalidPatternError(SchemaDefinitionError):
    """A rule's regular expression does not compile."""

    def __init__(self, path: str, pattern: str, cause: Exception):
        self.path = path
        self.pattern = pattern
        super().__init__(f"invalid pattern {pattern!r} for field {path!r}: {cause}")


class InvalidTypeDescriptorError(SchemaDefinitionError):
    """A type descriptor string does not follow the descriptor grammar."""

    def __init__(self, descriptor: str, reason: str):
        self.descriptor = descriptor
        super().__init__(f"invalid type descriptor {descriptor!r}: {reason}")


class DuplicateFieldError(SchemaDefinitionError):
    """Two rules in one schema target the same path."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"field {path!r} is declared more than once")
