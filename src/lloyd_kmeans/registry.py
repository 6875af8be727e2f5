"""Extension-keyed registry shared by dataset readers and result writers."""

from __future__ import annotations

from pathlib import Path
from typing import Generic, Protocol, TypeVar


class _HasExtensions(Protocol):
    @classmethod
    def supported_extensions(cls) -> list[str]: ...


H = TypeVar("H", bound=_HasExtensions)


class FormatRegistry(Generic[H]):
    """Map file extensions to handler classes.

    Extensions are stored lower-cased with the leading dot (``.csv``). A
    later registration for the same extension replaces the earlier one.

    Example:
        >>> readers = FormatRegistry[DatasetReader]("reader", DatasetLoadError)
        >>> readers.register(CSVDatasetReader)
        >>> readers.create("points.csv")
    """

    def __init__(self, kind: str, error: type[Exception] = ValueError) -> None:
        self.kind = kind
        self.error = error
        self._handlers: dict[str, type[H]] = {}

    def register(self, handler_cls: type[H]) -> type[H]:
        """Register ``handler_cls`` for all of its extensions.

        Returns the class unchanged so it can be used as a decorator.
        """
        for ext in handler_cls.supported_extensions():
            self._handlers[ext.lower().strip()] = handler_cls
        return handler_cls

    def create(self, path: Path | str) -> H:
        """Instantiate the handler registered for the extension of ``path``.

        Raises:
            The registry's error type if no handler matches
        """
        ext = Path(path).suffix.lower()
        handler_cls = self._handlers.get(ext)
        if handler_cls is None:
            raise self.error(
                f"Unsupported format: {ext}. Supported formats: {', '.join(self.formats())}"
            )
        return handler_cls()

    def formats(self) -> list[str]:
        return list(self._handlers)

    def __repr__(self) -> str:
        return f"FormatRegistry(kind={self.kind!r}, formats={self.formats()})"
