"""Tests for result writers and save_dataset."""

import io

import polars as pl
import pytest

from lloyd_kmeans.loaders import load_dataset
from lloyd_kmeans.savers import save_dataset
from lloyd_kmeans.savers.writers import (
    CSVResultWriter,
    ParquetResultWriter,
    get_writer,
    register_writer,
    supported_formats,
)
from lloyd_kmeans.savers.writers.base import format_cluster_label, result_headers


class TestResultHeaders:
    """Test header construction for results."""

    def test_uses_source_headers(self):
        assert result_headers(["lon", "lat"]) == ["lon", "lat", "Cluster"]

    def test_drops_extra_source_headers(self):
        assert result_headers(["X", "Y", "Cluster"]) == ["X", "Y", "Cluster"]

    def test_defaults_without_headers(self):
        assert result_headers(None) == ["x", "y", "Cluster"]

    def test_pads_single_header(self):
        assert result_headers(["lon"]) == ["lon", "y", "Cluster"]

    def test_format_cluster_label(self):
        assert format_cluster_label(4) == "cluster_4"
        assert format_cluster_label(-1) == "cluster_-1"


class TestCSVResultWriter:
    """Test CSVResultWriter."""

    def test_write_format(self, two_groups):
        """Test the exact text layout of a result."""
        two_groups.headers = ["X", "Y"]
        two_groups.clusters[:] = [0, 0, 0, 1, 1, 1]
        stream = io.StringIO()

        CSVResultWriter().write(two_groups, stream)

        lines = stream.getvalue().splitlines()
        assert lines[0] == "X,Y,Cluster"
        assert lines[1] == "0.0,0.0,cluster_0"
        assert lines[4] == "10.0,10.0,cluster_1"
        assert len(lines) == 7

    def test_header_without_source_headers(self, two_groups):
        stream = io.StringIO()
        CSVResultWriter().write(two_groups, stream)
        assert stream.getvalue().startswith("x,y,Cluster\n")

    def test_round_trip(self, tmp_path, noisy_coords, make_dataset):
        """Test that reading a written result gives identical points."""
        dataset = make_dataset(noisy_coords, headers=["X", "Y"])
        dataset.clusters[:] = range(len(noisy_coords))
        path = tmp_path / "out" / "result.csv"

        CSVResultWriter().write_to_path(dataset, path)
        loaded = load_dataset(path, max_points=len(noisy_coords))

        assert loaded.coords.tobytes() == dataset.coords.tobytes()
        assert loaded.clusters.tolist() == dataset.clusters.tolist()

    def test_overwrites_existing(self, tmp_path, two_groups):
        path = tmp_path / "result.csv"
        path.write_text("stale\n" * 50)

        CSVResultWriter().write_to_path(two_groups, path)

        assert "stale" not in path.read_text()

    def test_write_failure(self, tmp_path, two_groups):
        """Test that an unwritable path raises IOError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(IOError, match="Failed to write CSV result"):
            CSVResultWriter().write_to_path(two_groups, blocker / "result.csv")


class TestParquetResultWriter:
    """Test ParquetResultWriter."""

    def test_columns_and_types(self, tmp_path, two_groups):
        two_groups.headers = ["X", "Y"]
        two_groups.clusters[:] = [0, 0, 0, 1, 1, 1]
        path = tmp_path / "result.parquet"

        ParquetResultWriter().write_to_path(two_groups, path)

        df = pl.read_parquet(path)
        assert df.columns == ["X", "Y", "Cluster"]
        assert df.dtypes == [pl.Float64, pl.Float64, pl.Int64]
        assert df["Cluster"].to_list() == [0, 0, 0, 1, 1, 1]

    def test_round_trip(self, tmp_path, noisy_coords, make_dataset):
        """Test that reading a written result gives identical points."""
        dataset = make_dataset(noisy_coords)
        dataset.clusters[:] = 3
        path = tmp_path / "result.parquet"

        ParquetResultWriter().write_to_path(dataset, path)
        loaded = load_dataset(path, max_points=len(noisy_coords))

        assert loaded.coords.tobytes() == dataset.coords.tobytes()
        assert loaded.clusters.tolist() == [3] * len(noisy_coords)


class TestSaveDataset:
    """Test save_dataset and writer lookup."""

    def test_picks_writer_by_extension(self):
        assert isinstance(get_writer("a.csv"), CSVResultWriter)
        assert isinstance(get_writer("a.parquet"), ParquetResultWriter)
        assert set(supported_formats()) >= {".csv", ".parquet"}

    def test_unsupported_extension(self, tmp_path, two_groups):
        with pytest.raises(ValueError, match="Unsupported format"):
            save_dataset(two_groups, tmp_path / "result.json")

    def test_returns_path(self, tmp_path, two_groups):
        path = save_dataset(two_groups, str(tmp_path / "result.csv"))
        assert path == tmp_path / "result.csv"
        assert path.is_file()


class TestRegisterWriter:
    """Test adding a writer for a custom extension."""

    def test_custom_writer_is_used(self, tmp_path, two_groups):
        class TabSeparatedWriter(CSVResultWriter):
            def write_to_path(self, dataset, path):
                lines = [
                    f"{x}\t{y}\t{format_cluster_label(k)}"
                    for (x, y), k in zip(dataset.coords.tolist(), dataset.clusters.tolist())
                ]
                path.write_text("\n".join(lines) + "\n")

            @classmethod
            def supported_extensions(cls):
                return [".tsv"]

        assert register_writer(TabSeparatedWriter) is TabSeparatedWriter
        two_groups.clusters[:] = 0

        path = save_dataset(two_groups, tmp_path / "result.tsv")

        assert ".tsv" in supported_formats()
        assert path.read_text().splitlines()[0] == "0.0\t0.0\tcluster_0"
