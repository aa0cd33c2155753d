"""Tests for the default dot-path accessor."""

import pytest

from fieldguard.exceptions import MalformedPathError
from fieldguard.paths import NOT_FOUND, DotPathAccessor, split_path


@pytest.fixture
def accessor() -> DotPathAccessor:
    return DotPathAccessor()


class TestSplitPath:
    def test_segments(self) -> None:
        assert split_path("profile.address.city") == ["profile", "address", "city"]

    @pytest.mark.parametrize("path", ["", "a..b", ".a", "a.", None])
    def test_rejects(self, path) -> None:
        with pytest.raises(MalformedPathError):
            split_path(path)


class TestRead:
    def test_nested(self, accessor) -> None:
        doc = {"profile": {"address": {"city": "Lyon"}}}
        assert accessor.read(doc, "profile.address.city") == "Lyon"
        assert accessor.read(doc, "profile.address") == {"city": "Lyon"}

    def test_missing(self, accessor) -> None:
        assert accessor.read({"a": {}}, "a.b") is NOT_FOUND
        assert accessor.read({}, "a.b.c") is NOT_FOUND

    def test_through_scalar(self, accessor) -> None:
        assert accessor.read({"a": 5}, "a.b") is NOT_FOUND
        assert accessor.read({"a": "text"}, "a.0") is NOT_FOUND

    def test_sequence_index(self, accessor) -> None:
        doc = {"items": [{"sku": "x"}, {"sku": "y"}]}
        assert accessor.read(doc, "items.1.sku") == "y"
        assert accessor.read(doc, "items.2.sku") is NOT_FOUND
        assert accessor.read(doc, "items.first") is NOT_FOUND

    def test_non_decimal_digit_segment(self, accessor) -> None:
        assert accessor.read({"a": [1, 2, 3]}, "a.\N{SUPERSCRIPT TWO}") is NOT_FOUND

    def test_explicit_null_is_not_missing(self, accessor) -> None:
        assert accessor.read({"a": None}, "a") is None

    def test_non_mapping_document(self, accessor) -> None:
        assert accessor.read(None, "a") is NOT_FOUND


class TestWrite:
    def test_creates_intermediate_mappings(self, accessor) -> None:
        doc = {}
        accessor.write(doc, "a.b.c", 1)
        accessor.write(doc, "a.b.d", 2)
        assert doc == {"a": {"b": {"c": 1, "d": 2}}}

    def test_into_existing_sequence_item(self, accessor) -> None:
        doc = {"items": [{"sku": "x"}]}
        accessor.write(doc, "items.0.qty", 3)
        assert doc == {"items": [{"sku": "x", "qty": 3}]}

    def test_conflict_with_scalar(self, accessor) -> None:
        with pytest.raises(MalformedPathError):
            accessor.write({"a": 5}, "a.b", 1)

    def test_missing_sequence_item(self, accessor) -> None:
        with pytest.raises(MalformedPathError):
            accessor.write({"items": []}, "items.0.qty", 1)

    def test_non_decimal_digit_segment(self, accessor) -> None:
        with pytest.raises(MalformedPathError):
            accessor.write({"a": [1, 2, 3]}, "a.\N{SUPERSCRIPT TWO}", 1)


def test_not_found_sentinel() -> None:
    assert not NOT_FOUND
    assert repr(NOT_FOUND) == "NOT_FOUND"
    assert type(NOT_FOUND)() is NOT_FOUND
