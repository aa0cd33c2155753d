"""Schema loader — builds a Schema from a JSON declaration file.

Declaration files hold only data. Default providers and custom checks are
code, so a file names them and the caller supplies the registries:

    {
        "fields": {
            "name":  {"type": "string", "required": true, "pattern": "[A-Za-z ]+"},
            "age":   {"type": "number", "boundaries": {"min": 0, "max": 120}},
            "owner": {"type": "ObjectId", "rights": ["admin", "user", "owner"]},
            "tags":  {"type": "[]string", "default": "empty_tags"}
        }
    }
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Union

import structlog

from fieldguard.config import get_settings
from fieldguard.exceptions import SchemaDefinitionError
from fieldguard.schema import CustomCheck, DefaultProvider, FieldRule, Schema

logger = structlog.get_logger()

DECLARATION_KEYS = {"type", "pattern", "boundaries", "rights", "required", "default", "custom_check"}


def _resolve(path: Union[str, Path]) -> Path:
    path = Path(path)
    if not path.is_absolute() and not path.exists():
        path = Path(get_settings().SCHEMA_DIR) / path
    return path


def _lookup(registry: Optional[Mapping[str, Any]], name: Any, kind: str, field: str) -> Any:
    if name is None:
        return None
    if not registry or name not in registry:
        raise SchemaDefinitionError(f"unknown {kind} {name!r} for field {field!r}")
    return registry[name]


def build_rule(
    path: str,
    declaration: Mapping[str, Any],
    providers: Optional[Mapping[str, DefaultProvider]] = None,
    checks: Optional[Mapping[str, CustomCheck]] = None,
) -> FieldRule:
    """Turn one declaration dict into a FieldRule, resolving named callables."""
    if not isinstance(declaration, Mapping):
        raise SchemaDefinitionError(f"declaration for field {path!r} must be an object")
    unknown = set(declaration) - DECLARATION_KEYS
    if unknown:
        raise SchemaDefinitionError(f"unknown keys {sorted(unknown)} for field {path!r}")

    params = dict(declaration)
    params["default"] = _lookup(providers, params.get("default"), "default provider", path)
    params["custom_check"] = _lookup(checks, params.get("custom_check"), "custom check", path)
    return FieldRule.declare(path, **params)


def load_schema(
    path: Union[str, Path],
    providers: Optional[Mapping[str, DefaultProvider]] = None,
    checks: Optional[Mapping[str, CustomCheck]] = None,
) -> Schema:
    """Load and build a schema declaration file.

    Args:
        path: JSON file; relative paths fall back to Settings.SCHEMA_DIR
        providers: Named default providers referenced by ``"default"``
        checks: Named custom checks referenced by ``"custom_check"``

    Returns:
        The built, immutable Schema

    Raises:
        SchemaDefinitionError: if the file is unreadable or any rule is broken
    """
    file = _resolve(path)
    try:
        data = json.loads(file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise SchemaDefinitionError(f"cannot load schema {str(file)!r}: {e}") from e

    fields = data.get("fields", data) if isinstance(data, dict) else None
    if not isinstance(fields, dict):
        raise SchemaDefinitionError(f"schema {str(file)!r} must map field paths to declarations")

    schema = Schema(build_rule(p, d, providers, checks) for p, d in fields.items())
    logger.info("schema_loaded", file=str(file), rules=len(schema))
    return schema
