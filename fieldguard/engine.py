"""Validation Engine — applies a schema to one document in a single pass.

This is the main entry point. For every rule it reads the field, applies the
presence/default policy, runs the checker chain and builds a fresh output
document holding only the fields that passed or were defaulted.

Usage:
    engine = ValidationEngine()
    result = engine.validate(schema, document, Options(usage=Usage.SET, role=Role.USER))
    if not result.ok:
        # Respond with result.error_payload()
"""

import copy
import time
from typing import Any, Optional

import structlog

from fieldguard.checkers import BaseChecker, RightsChecker, TypeChecker, ValueChecker
from fieldguard.config import get_settings
from fieldguard.models import ErrorKind, Options, Usage, ValidationError, ValidationResult
from fieldguard.paths import NOT_FOUND, PathAccessor, default_accessor
from fieldguard.schema import FieldRule, Schema
from fieldguard.types import ValueKind, kind_of

logger = structlog.get_logger()


def is_absent(value: Any) -> bool:
    """Missing, null and empty sequences all count as "not provided"."""
    if value is NOT_FOUND or value is None:
        return True
    return kind_of(value) is ValueKind.SEQUENCE and len(value) == 0


class ValidationEngine:
    """Runs the type, value and rights checkers over every schema field.

    Design principles:
        - Pure: no I/O, no shared mutable state, safe across threads
        - Complete: a failing field never stops the others from being checked
        - Strict order per field: type, then value, then rights
    """

    def __init__(
        self,
        checkers: Optional[list[BaseChecker]] = None,
        accessor: Optional[PathAccessor] = None,
    ):
        """Initialize with the default checker chain or a custom one.

        Args:
            checkers: Optional ordered checker chain. If None, uses the defaults.
            accessor: Optional path accessor. If None, uses DotPathAccessor.
        """
        self.checkers = checkers or self._default_checkers()
        self.accessor = accessor or default_accessor

    @staticmethod
    def _default_checkers() -> list[BaseChecker]:
        """Create the default checker chain in execution order."""
        return [
            TypeChecker(),    # Value and rights checks assume a well-typed value
            ValueChecker(),   # Pattern, boundaries, custom predicate
            RightsChecker(),  # Role vs. the rule's requirement for this usage
        ]

    def validate(
        self,
        schema: Schema,
        document: Any,
        options: Optional[Options] = None,
    ) -> ValidationResult:
        """Validate document against schema.

        Args:
            schema: Immutable schema built at startup
            document: Decoded document (nested dicts, lists, scalars)
            options: Usage mode, caller role and default-provider args

        Returns:
            ValidationResult with the sanitized document and every error

        Raises:
            MalformedPathError: if the output document cannot hold a field,
                which means the schema declares conflicting paths
        """
        start_time = time.perf_counter()
        options = options or Options()

        output: dict[str, Any] = {}
        errors: list[ValidationError] = []

        for rule in schema:
            value = self.accessor.read(document, rule.path)

            if is_absent(value):
                self._handle_absent(rule, options, output, errors)
                continue

            error = self._run_checkers(rule, value, options)
            if error is not None:
                errors.append(error)
                continue

            if options.usage == Usage.SET:
                # Flat dotted key for partial updates in the document store
                output[rule.path] = copy.deepcopy(value)
            else:
                self.accessor.write(output, rule.path, copy.deepcopy(value))

        duration = (time.perf_counter() - start_time) * 1000
        log = logger.info if get_settings().LOG_VALIDATION_SUMMARY else logger.debug
        log(
            "validation_complete",
            usage=options.usage.name,
            role=options.role.name,
            fields=len(schema),
            errors=len(errors),
            duration_ms=round(duration, 3),
        )

        return ValidationResult(document=output, errors=errors)

    def _handle_absent(
        self,
        rule: FieldRule,
        options: Options,
        output: dict[str, Any],
        errors: list[ValidationError],
    ) -> None:
        """Apply the presence policy. Only Init requires or defaults fields."""
        if options.usage != Usage.INIT:
            return
        if rule.required:
            errors.append(ValidationError(
                kind=ErrorKind.REQUIRED_FIELD_MISSING,
                reason="Required",
                field=rule.path,
            ))
        elif rule.default is not None:
            self.accessor.write(output, rule.path, rule.default(options.args))

    def _run_checkers(self, rule: FieldRule, value: Any, options: Options) -> Optional[ValidationError]:
        """Run the chain; the first error ends it."""
        for checker in self.checkers:
            error = checker.check(rule, value, options)
            if error is not None:
                return error
        return None


# Module-level default engine
validation_engine = ValidationEngine()


def validate(schema: Schema, document: Any, options: Optional[Options] = None) -> ValidationResult:
    """Validate with the default engine."""
    return validation_engine.validate(schema, document, options)
