"""Dataset readers, looked up by file extension."""

from pathlib import Path

from lloyd_kmeans.exceptions import DatasetLoadError
from lloyd_kmeans.registry import FormatRegistry

from .base import DatasetReader, parse_cluster_label
from .csv import CSVDatasetReader
from .parquet import ParquetDatasetReader

_readers: FormatRegistry[DatasetReader] = FormatRegistry("reader", DatasetLoadError)
_readers.register(CSVDatasetReader)
_readers.register(ParquetDatasetReader)


def get_reader(path: Path | str) -> DatasetReader:
    """Reader for the extension of ``path``.

    Raises:
        DatasetLoadError: If no reader handles the extension
    """
    return _readers.create(path)


def register_reader(reader_cls: type[DatasetReader]) -> type[DatasetReader]:
    """Add or replace the reader for the extensions ``reader_cls`` declares."""
    return _readers.register(reader_cls)


def supported_formats() -> list[str]:
    return _readers.formats()


__all__ = [
    "DatasetReader",
    "CSVDatasetReader",
    "ParquetDatasetReader",
    "get_reader",
    "parse_cluster_label",
    "register_reader",
    "supported_formats",
]
