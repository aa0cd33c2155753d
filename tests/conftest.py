"""Shared fixtures for the fieldguard test suite."""

import pytest

from fieldguard.config import get_settings
from fieldguard.models import Options, Role, Usage
from fieldguard.schema import Schema

OBJECT_ID = "507f1f77bcf86cd799439011"


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached per process; tests that touch env need a clean slate."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def user_schema() -> Schema:
    return Schema.from_definitions({
        "name": {"type": "string", "required": True, "pattern": r"[A-Za-z ]+"},
        "age": {"type": "number", "boundaries": {"min": 0, "max": 120}},
        "owner": {"type": "ObjectId", "rights": ["admin", "user", "owner"]},
        "tags": {"type": "[]string"},
        "profile.city": {"type": "string"},
        "created": {"type": "number", "default": lambda args: args["now"]},
    })


def opts(usage: Usage, role: Role = Role.ADMIN, args=None) -> Options:
    return Options(usage=usage, role=role, args=args)
