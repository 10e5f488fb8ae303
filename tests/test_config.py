"""Tests for import settings."""

from pathlib import Path
from unittest.mock import patch

import pytest

from src.config import FILES_PER_WORKER, ImportSettings, is_valid_table_name
from src.errors import ConfigurationError


class TestImportSettings:
    """Test cases for ImportSettings."""

    def test_defaults_follow_cpu_count(self, tmp_path):
        with patch("src.config.os.cpu_count", return_value=4):
            settings = ImportSettings(source=tmp_path, destination=tmp_path / "t.db", table="osm")

        assert settings.workers == 4
        assert settings.batch_size == 4 * FILES_PER_WORKER
        assert settings.extension == "png"
        assert settings.verbose is False

    def test_unknown_cpu_count(self, tmp_path):
        with patch("src.config.os.cpu_count", return_value=None):
            settings = ImportSettings(source=tmp_path, destination=tmp_path / "t.db", table="osm")

        assert settings.workers == 1
        assert settings.batch_size == FILES_PER_WORKER

    def test_batch_size_follows_explicit_workers(self, tmp_path):
        settings = ImportSettings(
            source=tmp_path, destination=tmp_path / "t.db", table="osm", workers=3
        )
        assert settings.batch_size == 3 * FILES_PER_WORKER

    def test_paths_are_converted(self, tmp_path):
        settings = ImportSettings(
            source=str(tmp_path), destination=str(tmp_path / "t.db"), table="osm"
        )
        assert isinstance(settings.source, Path)
        assert isinstance(settings.destination, Path)

    def test_validate_returns_settings(self, tmp_path):
        settings = ImportSettings(source=tmp_path, destination=tmp_path / "t.db", table="osm")

        assert not settings.validated
        assert settings.validate() is settings
        assert settings.validated

    @pytest.mark.parametrize("missing", ["source", "destination", "table"])
    def test_missing_required_option(self, tmp_path, missing):
        values = {"source": tmp_path, "destination": tmp_path / "t.db", "table": "osm"}
        values[missing] = None

        with pytest.raises(ConfigurationError) as excinfo:
            ImportSettings(**values).validate()

        assert "wrong arguments" in str(excinfo.value)

    def test_empty_table_is_missing(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ImportSettings(source=tmp_path, destination=tmp_path / "t.db", table="").validate()

    def test_source_must_be_directory(self, tmp_path):
        not_a_dir = tmp_path / "file.txt"
        not_a_dir.write_text("x")

        with pytest.raises(ConfigurationError):
            ImportSettings(source=not_a_dir, destination=tmp_path / "t.db", table="osm").validate()
        with pytest.raises(ConfigurationError):
            ImportSettings(
                source=tmp_path / "missing", destination=tmp_path / "t.db", table="osm"
            ).validate()

    def test_destination_must_not_be_directory(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ImportSettings(source=tmp_path, destination=tmp_path, table="osm").validate()

    @pytest.mark.parametrize("field, value", [("workers", 0), ("batch_size", 0), ("batch_size", -5)])
    def test_counts_must_be_positive(self, tmp_path, field, value):
        values = {"source": tmp_path, "destination": tmp_path / "t.db", "table": "osm", "workers": 2}
        values[field] = value

        with pytest.raises(ConfigurationError):
            ImportSettings(**values).validate()

    def test_extension_dot_is_stripped(self, tmp_path):
        settings = ImportSettings(
            source=tmp_path, destination=tmp_path / "t.db", table="osm", extension=".jpg"
        ).validate()
        assert settings.extension == "jpg"

    def test_empty_extension(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ImportSettings(
                source=tmp_path, destination=tmp_path / "t.db", table="osm", extension="."
            ).validate()

    def test_invalid_table_name(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ImportSettings(
                source=tmp_path, destination=tmp_path / "t.db", table="tiles; DROP TABLE x"
            ).validate()


class TestIsValidTableName:
    """Test cases for is_valid_table_name()."""

    @pytest.mark.parametrize("name", ["tiles", "gis2", "_tiles", "Tiles_2024"])
    def test_valid(self, name):
        assert is_valid_table_name(name)

    @pytest.mark.parametrize("name", ["", "2tiles", "my tiles", "tiles;", "a-b", "t\"x"])
    def test_invalid(self, name):
        assert not is_valid_table_name(name)
