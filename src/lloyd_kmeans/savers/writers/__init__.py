"""Result writers, looked up by file extension."""

from pathlib import Path

from lloyd_kmeans.registry import FormatRegistry

from .base import ResultWriter
from .csv import CSVResultWriter
from .parquet import ParquetResultWriter

_writers: FormatRegistry[ResultWriter] = FormatRegistry("writer", ValueError)
_writers.register(CSVResultWriter)
_writers.register(ParquetResultWriter)


def get_writer(path: Path | str) -> ResultWriter:
    """Writer for the extension of ``path``.

    Raises:
        ValueError: If no writer handles the extension
    """
    return _writers.create(path)


def register_writer(writer_cls: type[ResultWriter]) -> type[ResultWriter]:
    """Add or replace the writer for the extensions ``writer_cls`` declares."""
    return _writers.register(writer_cls)


def supported_formats() -> list[str]:
    return _writers.formats()


__all__ = [
    "ResultWriter",
    "CSVResultWriter",
    "ParquetResultWriter",
    "get_writer",
    "register_writer",
    "supported_formats",
]
