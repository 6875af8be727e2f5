"""Tests for the extension registry."""

import pytest

from lloyd_kmeans.exceptions import DatasetLoadError
from lloyd_kmeans.registry import FormatRegistry


class _TextHandler:
    @classmethod
    def supported_extensions(cls) -> list[str]:
        return [".TXT ", ".text"]


class _OtherTextHandler:
    @classmethod
    def supported_extensions(cls) -> list[str]:
        return [".txt"]


class TestFormatRegistry:
    """Test FormatRegistry."""

    def test_register_normalizes_extensions(self):
        registry = FormatRegistry("handler")
        registry.register(_TextHandler)
        assert registry.formats() == [".txt", ".text"]

    def test_create_by_suffix(self):
        registry = FormatRegistry("handler")
        registry.register(_TextHandler)
        assert isinstance(registry.create("notes.TEXT"), _TextHandler)

    def test_later_registration_wins(self):
        registry = FormatRegistry("handler")
        registry.register(_TextHandler)
        registry.register(_OtherTextHandler)
        assert isinstance(registry.create("a.txt"), _OtherTextHandler)
        assert isinstance(registry.create("a.text"), _TextHandler)

    def test_register_returns_class(self):
        registry = FormatRegistry("handler")
        assert registry.register(_TextHandler) is _TextHandler

    def test_unknown_extension_raises_configured_error(self):
        registry = FormatRegistry("reader", DatasetLoadError)
        registry.register(_TextHandler)
        with pytest.raises(DatasetLoadError, match=r"Unsupported format: \.csv"):
            registry.create("points.csv")
