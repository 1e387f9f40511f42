"""Tests for the ruamel.yaml based loader in yam/data_formats/yaml_loader.py."""

from __future__ import annotations

import pytest

from yam.data_formats import JSONLoader, YAMLLoader, serialize_yaml, to_python
from yam.errors import ParseError
from yam.tree import NodeKind, get_by_path, root_value

from conftest import SAMPLE_YAML, child


class TestYAMLLoaderParse:
    """Tests for YAMLLoader.parse()."""

    def test_format_metadata(self, yaml_loader):
        assert yaml_loader.format_name == "yaml"
        assert yaml_loader.supported_extensions == [".yaml", ".yml"]

    def test_parse_returns_document(self, sample_doc):
        top = root_value(sample_doc)
        assert sample_doc.kind is NodeKind.DOCUMENT
        assert top.kind is NodeKind.MAPPING
        assert [c.key for c in top.children] == ["server", "debug"]

    def test_key_order_preserved(self, yaml_loader):
        """Keys keep document order, not sorted order."""
        doc = yaml_loader.parse("zeta: 1\nalpha: 2\nmid: 3\n")
        assert [c.key for c in root_value(doc).children] == ["zeta", "alpha", "mid"]

    def test_scalar_tags(self, sample_doc):
        """Plain scalars carry their resolved core tag."""
        server = child(root_value(sample_doc), "server")
        assert child(server, "host").tag == "!!str"
        assert child(server, "port").tag == "!!int"
        assert child(root_value(sample_doc), "debug").tag == "!!bool"

    def test_quoted_number_is_string(self, yaml_loader):
        doc = yaml_loader.parse('port: "8080"\n')
        port = root_value(doc).children[0]
        assert port.value == "8080"
        assert port.tag == "!!str"

    def test_source_positions(self, sample_doc):
        """Line and column are 1-based."""
        server = child(root_value(sample_doc), "server")
        port = child(server, "port")
        assert port.line == 3
        assert port.column == 9

    def test_anchor_and_alias(self, yaml_loader):
        """A repeated anchored node becomes an ALIAS carrying the anchor name."""
        doc = yaml_loader.parse("base: &defaults\n  x: 1\ncopy: *defaults\n")
        base = get_by_path(doc, ".base")
        copy = get_by_path(doc, ".copy")
        assert base.kind is NodeKind.MAPPING
        assert base.anchor == "defaults"
        assert copy.kind is NodeKind.ALIAS
        assert copy.value == "defaults"
        assert copy.children == []

    def test_only_first_document(self, yaml_loader):
        doc = yaml_loader.parse("a: 1\n---\nb: 2\n")
        assert [c.key for c in root_value(doc).children] == ["a"]

    def test_top_level_sequence(self, yaml_loader):
        doc = yaml_loader.parse("- 1\n- two\n")
        top = root_value(doc)
        assert top.kind is NodeKind.SEQUENCE
        assert [c.value for c in top.children] == ["1", "two"]

    @pytest.mark.parametrize("text", ["", "   \n", "# only a comment\n"])
    def test_empty_document(self, yaml_loader, text):
        with pytest.raises(ParseError, match="empty YAML document"):
            yaml_loader.parse(text)

    def test_malformed_document(self, yaml_loader):
        with pytest.raises(ParseError, match="failed to parse YAML"):
            yaml_loader.parse("a: [1, 2\nb: 3\n")

    def test_load_file(self, yaml_loader, sample_yaml_file):
        doc = yaml_loader.load(str(sample_yaml_file))
        assert get_by_path(doc, ".server.host").value == "localhost"


class TestYAMLSerialize:
    """Tests for writing trees back out as YAML."""

    def test_unedited_round_trip(self, yaml_loader, sample_doc):
        """Serializing an unedited tree keeps its structure."""
        text = yaml_loader.serialize(sample_doc)
        assert to_python(yaml_loader.parse(text)) == to_python(sample_doc)

    def test_edited_scalar_is_written(self, yaml_loader, sample_doc):
        get_by_path(sample_doc, ".server.port").value = "9090"
        text = yaml_loader.serialize(sample_doc)
        assert "port: 9090" in text
        assert "host: localhost" in text

    def test_edit_changes_implicit_type(self, yaml_loader, sample_doc):
        """A plain number edited to text is written as plain text."""
        get_by_path(sample_doc, ".server.port").value = "auto"
        reparsed = yaml_loader.parse(yaml_loader.serialize(sample_doc))
        port = get_by_path(reparsed, ".server.port")
        assert port.value == "auto"
        assert port.tag == "!!str"

    def test_quoted_scalar_stays_string(self, yaml_loader):
        doc = yaml_loader.parse('version: "1.0"\n')
        root_value(doc).children[0].value = "2.0"
        reparsed = yaml_loader.parse(yaml_loader.serialize(doc))
        version = root_value(reparsed).children[0]
        assert version.value == "2.0"
        assert version.tag == "!!str"

    def test_sort_keys(self, yaml_loader):
        doc = yaml_loader.parse("b: 1\na:\n  d: 1\n  c: 2\n")
        text = yaml_loader.serialize(doc, sort_keys=True)
        reparsed = root_value(yaml_loader.parse(text))
        assert [c.key for c in reparsed.children] == ["a", "b"]
        assert [c.key for c in reparsed.children[0].children] == ["c", "d"]

    def test_json_tree_to_yaml(self):
        """Trees without a ruamel graph are dumped from plain containers."""
        doc = JSONLoader().parse('{"a": 1, "b": [true, null], "c": "x"}')
        text = serialize_yaml(doc)
        assert to_python(YAMLLoader().parse(text)) == {"a": 1, "b": [True, None], "c": "x"}

    def test_serialize_yaml_indent(self, sample_doc):
        text = serialize_yaml(sample_doc, indent=4)
        assert "\n    host: localhost\n" in text

    def test_sample_round_trip_is_stable(self, yaml_loader):
        """A block-style document without comments is written back unchanged."""
        assert yaml_loader.serialize(yaml_loader.parse(SAMPLE_YAML)) == SAMPLE_YAML
