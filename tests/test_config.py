"""Tests for configuration handling."""

from pathlib import Path

import pytest

from md_task_export.config import (
    DEFAULT_OUTPUT_FILENAME,
    ExportConfig,
    parse_delimiter,
    resolve_output_path,
    load_config,
    save_config,
)
from md_task_export.exceptions import InvalidOptionError


class TestParseDelimiter:
    """Test delimiter name resolution."""

    @pytest.mark.parametrize("value,expected", [
        ("comma", ","),
        ("Comma", ","),
        (",", ","),
        ("semicolon", ";"),
        ("SEMICOLON", ";"),
        (";", ";"),
    ])
    def test_valid_names(self, value, expected):
        assert parse_delimiter(value) == expected

    @pytest.mark.parametrize("value", ["tab", "|", "", "commas"])
    def test_invalid_names(self, value):
        with pytest.raises(InvalidOptionError):
            parse_delimiter(value)


class TestResolveOutputPath:
    """Test output path resolution."""

    def test_default(self):
        assert resolve_output_path(None) == Path(DEFAULT_OUTPUT_FILENAME)

    def test_csv_file(self):
        assert resolve_output_path("exports/tasks.csv") == Path("exports/tasks.csv")
        assert resolve_output_path("TASKS.CSV") == Path("TASKS.CSV")

    def test_existing_directory(self, tmp_path):
        assert resolve_output_path(str(tmp_path)) == tmp_path / DEFAULT_OUTPUT_FILENAME

    def test_path_without_csv_suffix_is_a_directory(self):
        assert resolve_output_path("exports") == Path("exports") / DEFAULT_OUTPUT_FILENAME
        assert resolve_output_path("tasks.txt") == Path("tasks.txt") / DEFAULT_OUTPUT_FILENAME


class TestExportConfig:
    """Test the config model."""

    def test_defaults(self):
        config = ExportConfig()

        assert config.input_path is None
        assert config.output_path == DEFAULT_OUTPUT_FILENAME
        assert config.delimiter == "comma"
        assert config.compress_levels is False
        assert config.include_header is True
        assert config.verbose is False

    def test_to_format_options(self):
        options = ExportConfig(delimiter="semicolon", compress_levels=True,
                               include_header=False).to_format_options()

        assert options.delimiter == ";"
        assert options.compress_levels is True
        assert options.include_header is False

    def test_to_format_options_invalid_delimiter(self):
        with pytest.raises(InvalidOptionError):
            ExportConfig(delimiter="pipe").to_format_options()

    def test_from_yaml(self):
        config = ExportConfig.from_yaml(
            "input_path: ./Customers\ndelimiter: semicolon\ncompress_levels: true\n"
        )

        assert config.input_path == "./Customers"
        assert config.delimiter == "semicolon"
        assert config.compress_levels is True
        assert config.include_header is True

    def test_from_empty_yaml(self):
        assert ExportConfig.from_yaml("") == ExportConfig()

    def test_unknown_key(self):
        with pytest.raises(InvalidOptionError):
            ExportConfig.from_yaml("colour: blue\n")

    def test_yaml_must_be_mapping(self):
        with pytest.raises(InvalidOptionError):
            ExportConfig.from_yaml("- a\n- b\n")

    def test_malformed_yaml(self):
        with pytest.raises(InvalidOptionError):
            ExportConfig.from_yaml("input_path: [unclosed\n")

    @pytest.mark.parametrize("text", [
        'compress_levels: "false"\n',
        'include_header: "false"\n',
        "verbose: 1\n",
    ])
    def test_flags_must_be_booleans(self, text):
        with pytest.raises(InvalidOptionError):
            ExportConfig.from_yaml(text)

    @pytest.mark.parametrize("text", [
        "input_path: 42\n",
        "output_path: [a, b]\n",
        "output_path: null\n",
        "delimiter: 1\n",
    ])
    def test_text_options_must_be_strings(self, text):
        with pytest.raises(InvalidOptionError):
            ExportConfig.from_yaml(text)

    def test_null_input_path_is_allowed(self):
        assert ExportConfig.from_yaml("input_path: null\n").input_path is None

    def test_merge_ignores_none(self):
        config = ExportConfig(input_path="in", delimiter="semicolon")

        merged = config.merge(input_path=None, output_path="out.csv", delimiter=None)

        assert merged.input_path == "in"
        assert merged.output_path == "out.csv"
        assert merged.delimiter == "semicolon"
        assert config.output_path == DEFAULT_OUTPUT_FILENAME


class TestLoadConfig:
    """Test loading and saving config files."""

    def test_no_path_gives_defaults(self):
        assert load_config(None) == ExportConfig()

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "settings" / "export.yaml"
        config = ExportConfig(input_path="Customers", delimiter="semicolon", verbose=True)

        save_config(config, path)

        assert load_config(path) == config

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidOptionError):
            load_config(tmp_path / "missing.yaml")
