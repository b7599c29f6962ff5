"""Tests for class name format conversion (invmatch._names)."""

import pytest

from invmatch import (
    ClassNameFormat,
    normalize_class_name,
    to_canonical_name,
    to_internal_name,
)


class TestConversions:
    def test_to_internal(self) -> None:
        assert to_internal_name("com.app.Widget") == "com/app/Widget"

    def test_to_canonical(self) -> None:
        assert to_canonical_name("com/app/Widget") == "com.app.Widget"

    def test_nested_class_marker_untouched(self) -> None:
        assert to_internal_name("com.app.Widget$Part") == "com/app/Widget$Part"
        assert to_canonical_name("com/app/Widget$Part") == "com.app.Widget$Part"

    @pytest.mark.parametrize("name", ["Widget", "com.app.Widget", "com/app/Widget", ""])
    def test_idempotent(self, name: str) -> None:
        assert to_internal_name(to_internal_name(name)) == to_internal_name(name)
        assert to_canonical_name(to_canonical_name(name)) == to_canonical_name(name)


class TestNormalizeClassName:
    @pytest.mark.parametrize("name", ["com.app.Widget", "com/app/Widget"])
    def test_internal(self, name: str) -> None:
        assert normalize_class_name(name, ClassNameFormat.INTERNAL) == "com/app/Widget"

    @pytest.mark.parametrize("name", ["com.app.Widget", "com/app/Widget"])
    def test_canonical(self, name: str) -> None:
        assert normalize_class_name(name, ClassNameFormat.CANONICAL) == "com.app.Widget"
