"""Tests for options module."""

from pathlib import Path

import pytest

from jmx2lr.core.options import ConverterOptions, load_options
from jmx2lr.exceptions import ConfigException


class TestConverterOptions:
    """Tests for ConverterOptions."""

    def test_defaults(self):
        """Test default option values."""
        options = ConverterOptions()

        assert options.to_dict() == {
            "enable_correlation": True,
            "script_prefix": "Script_",
            "write_dat_files": True,
        }

    def test_from_dict(self):
        """Test partial dictionaries keep defaults for missing keys."""
        options = ConverterOptions.from_dict({"script_prefix": "LR_"})

        assert options.script_prefix == "LR_"
        assert options.enable_correlation is True

    def test_unknown_key(self):
        """Test unknown keys are rejected."""
        with pytest.raises(ConfigException) as exc_info:
            ConverterOptions.from_dict({"enable_corelation": False}, source="opts.yaml")

        assert "enable_corelation" in str(exc_info.value)
        assert "opts.yaml" in str(exc_info.value)

    def test_wrong_type(self):
        """Test wrongly typed values are rejected."""
        with pytest.raises(ConfigException) as exc_info:
            ConverterOptions.from_dict({"write_dat_files": "no"})

        assert "expected bool, got str" in str(exc_info.value)


class TestLoadOptions:
    """Tests for load_options()."""

    def test_load(self, tmp_path: Path):
        """Test values from YAML override defaults."""
        path = tmp_path / "jmx2lr.yaml"
        path.write_text("enable_correlation: false\nscript_prefix: Perf_\n")

        options = load_options(str(path))

        assert options.enable_correlation is False
        assert options.script_prefix == "Perf_"
        assert options.write_dat_files is True

    def test_empty_file(self, tmp_path: Path):
        """Test an empty file yields defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_options(str(path)) == ConverterOptions()

    def test_missing_file(self, tmp_path: Path):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_options(str(tmp_path / "missing.yaml"))

    def test_invalid_yaml(self, tmp_path: Path):
        """Test invalid YAML raises ConfigException."""
        path = tmp_path / "bad.yaml"
        path.write_text("enable_correlation: [unclosed\n")

        with pytest.raises(ConfigException) as exc_info:
            load_options(str(path))

        assert "Invalid YAML syntax" in str(exc_info.value)

    def test_not_a_mapping(self, tmp_path: Path):
        """Test a YAML list is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigException) as exc_info:
            load_options(str(path))

        assert "expected dictionary" in str(exc_info.value)
