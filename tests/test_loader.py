"""Tests for loading schema declarations from JSON files.

Tests cover:
- Wrapped ({"fields": ...}) and bare declaration files
- Named default providers and custom checks
- Relative paths resolved against FIELDGUARD_SCHEMA_DIR
- Loud failures for unreadable files, unknown names and unknown keys
"""

import json

import pytest

from fieldguard import ErrorKind, Role, Usage, load_schema, validate
from fieldguard.exceptions import InvalidPatternError, InvalidTypeDescriptorError, SchemaDefinitionError
from fieldguard.loader import build_rule
from fieldguard.models import Boundaries, Options, Rights
from fieldguard.types import ScalarType

DECLARATIONS = {
    "fields": {
        "name": {"type": "string", "required": True, "pattern": "[A-Za-z ]+"},
        "age": {"type": "number", "boundaries": {"min": 0, "max": 120}},
        "owner": {"type": "ObjectId", "rights": ["admin", "user", "owner"]},
        "tags": {"type": "[]string", "default": "empty_tags"},
        "score": {"type": "number", "custom_check": "even"},
    }
}

PROVIDERS = {"empty_tags": lambda args: ["new"]}
CHECKS = {"even": lambda v: v % 2 == 0}


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "user.json"
    path.write_text(json.dumps(DECLARATIONS), encoding="utf-8")
    return path


class TestLoadSchema:
    def test_builds_rules(self, schema_file) -> None:
        schema = load_schema(schema_file, providers=PROVIDERS, checks=CHECKS)
        assert schema.paths == ("name", "age", "owner", "tags", "score")
        assert schema["age"].boundaries == Boundaries(min=0, max=120)
        assert schema["owner"].rights == Rights(init=Role.ADMIN, get=Role.USER, set=Role.OWNER)
        assert schema["owner"].type == ScalarType(name="ObjectId")
        assert schema["name"].required

    def test_loaded_schema_validates(self, schema_file) -> None:
        schema = load_schema(schema_file, providers=PROVIDERS, checks=CHECKS)
        result = validate(schema, {"name": "Ada", "score": 3}, Options(usage=Usage.INIT, role=Role.ADMIN))
        assert result.document == {"name": "Ada", "tags": ["new"]}
        assert [e.kind for e in result.errors] == [ErrorKind.CUSTOM_VALIDATION_FAILED]

    def test_bare_mapping(self, tmp_path) -> None:
        path = tmp_path / "bare.json"
        path.write_text(json.dumps({"title": {"type": "string"}}), encoding="utf-8")
        assert load_schema(path).paths == ("title",)

    def test_relative_to_schema_dir(self, tmp_path, monkeypatch) -> None:
        (tmp_path / "user.json").write_text(json.dumps(DECLARATIONS), encoding="utf-8")
        monkeypatch.setenv("FIELDGUARD_SCHEMA_DIR", str(tmp_path))
        schema = load_schema("user.json", providers=PROVIDERS, checks=CHECKS)
        assert len(schema) == 5


class TestLoadSchemaDefects:
    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(SchemaDefinitionError, match="cannot load schema"):
            load_schema(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SchemaDefinitionError):
            load_schema(path)

    def test_not_an_object(self, tmp_path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(SchemaDefinitionError, match="must map field paths"):
            load_schema(path)

    def test_unknown_provider(self, schema_file) -> None:
        with pytest.raises(SchemaDefinitionError, match="unknown default provider 'empty_tags'"):
            load_schema(schema_file, checks=CHECKS)

    def test_unknown_check(self, schema_file) -> None:
        with pytest.raises(SchemaDefinitionError, match="unknown custom check 'even'"):
            load_schema(schema_file, providers=PROVIDERS)


class TestBuildRule:
    def test_unknown_key(self) -> None:
        with pytest.raises(SchemaDefinitionError, match="unknown keys"):
            build_rule("name", {"type": "string", "nullable": True})

    def test_declaration_must_be_object(self) -> None:
        with pytest.raises(SchemaDefinitionError):
            build_rule("name", "string")

    def test_bad_pattern(self) -> None:
        with pytest.raises(InvalidPatternError):
            build_rule("name", {"pattern": "(("})

    def test_type_must_be_text(self) -> None:
        with pytest.raises(InvalidTypeDescriptorError, match="expected descriptor text, got list"):
            build_rule("name", {"type": ["string"]})

    def test_pattern_must_be_text(self) -> None:
        with pytest.raises(InvalidPatternError, match="expected a string, got int"):
            build_rule("name", {"pattern": 5})

    def test_bad_flag_value(self) -> None:
        with pytest.raises(SchemaDefinitionError, match="invalid declaration for field 'name'"):
            build_rule("name", {"required": "maybe"})

    def test_bad_declaration_in_file(self, tmp_path) -> None:
        path = tmp_path / "typo.json"
        path.write_text(json.dumps({"fields": {"name": {"type": ["string"]}}}), encoding="utf-8")
        with pytest.raises(SchemaDefinitionError):
            load_schema(path)
