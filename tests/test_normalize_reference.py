from __future__ import annotations

from saintlocator.processing.normalize import (
    normalize_choice,
    normalize_reference,
    normalize_text,
    safe_str,
)


class _DocRef:
    def __init__(self, path: str) -> None:
        self.path = path
        self.id = path.rsplit("/", 1)[-1]


class _PathOnly:
    def __init__(self, path: str) -> None:
        self.path = path


class TestNormalizeReference:
    def test_path_string(self) -> None:
        assert normalize_reference("saint/abc123") == "abc123"

    def test_leading_separator(self) -> None:
        assert normalize_reference("/saint/abc123") == "abc123"

    def test_bare_id(self) -> None:
        assert normalize_reference("abc123") == "abc123"

    def test_trailing_separator(self) -> None:
        assert normalize_reference("saint/abc123/") == "abc123"

    def test_mapping_with_path(self) -> None:
        assert normalize_reference({"path": "users/xyz"}) == "xyz"

    def test_mapping_with_id(self) -> None:
        assert normalize_reference({"id": "xyz"}) == "xyz"

    def test_empty_id_falls_back_to_path(self) -> None:
        assert normalize_reference({"id": "", "path": "saint/q1"}) == "q1"

    def test_reference_objects(self) -> None:
        assert normalize_reference(_DocRef("saint/s42")) == "s42"
        assert normalize_reference(_PathOnly("/saint/s43")) == "s43"

    def test_result_has_no_separator(self) -> None:
        assert "/" not in normalize_reference({"id": "saint/s44"})

    def test_absent(self) -> None:
        assert normalize_reference("") is None
        assert normalize_reference("/") is None
        assert normalize_reference(None) is None
        assert normalize_reference(42) is None
        assert normalize_reference({}) is None


class TestPlainFields:
    def test_safe_str(self) -> None:
        assert safe_str(None) == ""
        assert safe_str("  Jaipur ") == "Jaipur"

    def test_text(self) -> None:
        assert normalize_text("  Muni Shri  ") == "Muni Shri"
        assert normalize_text(7) == "7"
        assert normalize_text("   ") is None
        assert normalize_text(None) is None
        assert normalize_text(float("nan")) is None
        assert normalize_text({"a": 1}) is None
        assert normalize_text(False) is None

    def test_choice(self) -> None:
        table = {"male": "Male", "female": "Female"}
        assert normalize_choice(" FEMALE ", table) == "Female"
        assert normalize_choice(" other ", table) == "other"
        assert normalize_choice(None, table) is None
