"""Tests for format detection in yam/data_formats/format_detector.py."""

from __future__ import annotations

import io

import pytest

from yam.data_formats import (
    EXTENSION_MAP,
    SUPPORTED_FORMATS,
    JSONLoader,
    YAMLLoader,
    detect_format,
    get_loader,
    get_loader_for_format,
    load_file,
    sniff_format,
)
from yam.errors import FormatError, ParseError
from yam.tree import get_by_path


class TestDetectFormat:
    """Tests for detect_format() function."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("config.yaml", "yaml"),
            ("config.yml", "yaml"),
            ("package.json", "json"),
            ("DATA.JSON", "json"),
            ("Values.Yml", "yaml"),
        ],
    )
    def test_known_extensions(self, tmp_path, name, expected):
        assert detect_format(str(tmp_path / name)) == expected

    def test_unknown_extension_sniffs_json(self, tmp_path):
        path = tmp_path / "data.conf"
        path.write_text('\n  {"a": 1}')
        assert detect_format(str(path)) == "json"

    def test_unknown_extension_sniffs_array(self, tmp_path):
        path = tmp_path / "data"
        path.write_text("[1, 2]")
        assert detect_format(str(path)) == "json"

    def test_unknown_extension_sniffs_yaml(self, tmp_path):
        path = tmp_path / "data.txt"
        path.write_text("a: 1\n")
        assert detect_format(str(path)) == "yaml"

    def test_missing_unknown_file_defaults_to_yaml(self, tmp_path):
        assert detect_format(str(tmp_path / "missing.conf")) == "yaml"

    def test_extension_map_contents(self):
        assert EXTENSION_MAP == {".yaml": "yaml", ".yml": "yaml", ".json": "json"}
        assert SUPPORTED_FORMATS == {"yaml", "json"}


class TestSniffFormat:
    """Tests for sniff_format()."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ('{"a": 1}', "json"),
            ("  [1]", "json"),
            ("a: 1", "yaml"),
            ("- a", "yaml"),
            ("", "yaml"),
        ],
    )
    def test_sniff(self, text, expected):
        assert sniff_format(text) == expected


class TestGetLoader:
    """Tests for loader factories."""

    def test_loader_for_format(self):
        assert isinstance(get_loader_for_format("yaml"), YAMLLoader)
        assert isinstance(get_loader_for_format("json"), JSONLoader)

    def test_unsupported_format(self):
        with pytest.raises(FormatError, match="Unsupported format 'xml'"):
            get_loader_for_format("xml")

    def test_loader_by_filename(self, tmp_path):
        assert isinstance(get_loader(str(tmp_path / "a.json")), JSONLoader)
        assert isinstance(get_loader(str(tmp_path / "a.yml")), YAMLLoader)

    @pytest.mark.parametrize("name", ["-", "stdin"])
    def test_stdin_is_yaml(self, name):
        assert get_loader(name).format_name == "yaml"


class TestLoadFile:
    """Tests for load_file()."""

    def test_load_yaml(self, sample_yaml_file):
        doc, loader = load_file(str(sample_yaml_file))
        assert loader.format_name == "yaml"
        assert get_by_path(doc, ".server.port").value == "8080"

    def test_load_json(self, sample_json_file):
        doc, loader = load_file(str(sample_json_file))
        assert loader.format_name == "json"
        assert get_by_path(doc, ".server.tags[1]").value == "api"

    def test_load_stdin_stream(self):
        doc, loader = load_file("-", stdin=io.StringIO("a: 1\n"))
        assert loader.format_name == "yaml"
        assert get_by_path(doc, ".a").value == "1"

    def test_stdin_accepts_json(self):
        doc, _ = load_file("stdin", stdin=io.StringIO('{"a": [1, 2]}'))
        assert get_by_path(doc, ".a[1]").value == "2"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_file(str(tmp_path / "missing.yaml"))

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("")
        with pytest.raises(ParseError):
            load_file(str(path))
