"""Tests for the XSD token source."""

import io
from pathlib import Path

import pytest

from xsd_sequencer.errors import MalformedInputError
from xsd_sequencer.schema.base import NodeClosed, NodeOpened
from xsd_sequencer.schema.xsd import XsdTokenSource, local_name

FIXTURES = Path(__file__).parent.parent / "fixtures"

XS = 'xmlns:xs="http://www.w3.org/2001/XMLSchema" xmlns:tns="urn:test"'


def source_from(text: str) -> XsdTokenSource:
    return XsdTokenSource(io.BytesIO(text.encode("utf-8")))


def test_local_name():
    """Test namespace removal from Clark-notation names."""
    assert local_name("{http://www.w3.org/2001/XMLSchema}element") == "element"
    assert local_name("element") == "element"


class TestXsdTokenSource:
    """Test suite for XsdTokenSource."""

    def test_tokens_use_local_names(self) -> None:
        """Test that tags and attributes are exposed without namespaces."""
        source = source_from(
            f'<xs:schema {XS}><xs:element name="Root" type="tns:TRoot" '
            f'xmlns:ext="urn:ext" ext:hint="x"/></xs:schema>'
        )

        tokens = list(source.tokens())

        assert tokens == [
            NodeOpened(name="schema", attributes={}),
            NodeOpened(name="element", attributes={"name": "Root", "type": "tns:TRoot", "hint": "x"}),
            NodeClosed(name="element"),
            NodeClosed(name="schema"),
        ]

    def test_build_index_from_fixture(self) -> None:
        """Test indexing a realistic invoice schema."""
        index = XsdTokenSource(FIXTURES / "invoice.xsd").build_index()

        assert index.complete is True
        assert index.complex_types == {"THeader", "TParty", "TAddress", "TLine", "TAmount", "TEmpty"}
        assert list(index.sequence_order) == [
            "",
            "Invoice",
            "Invoice.Lines",
            "THeader",
            "TParty",
            "TAddress",
            "TLine",
            "TEmpty",
        ]
        assert index.sequence_order["Invoice"] == ["Header", "Seller", "Buyer", "Lines", "Total"]
        assert index.sequence_order["TAddress"] == ["CountryCode", "Line1", "Street", "City"]
        assert index.sequence_order["TEmpty"] == []
        assert index.field_types["Invoice.Lines.Line"] == "TLine"
        assert index.field_types["THeader.Currency"] == "TCurrency"
        assert "Invoice.Lines" not in index.field_types

    def test_accepts_str_path(self) -> None:
        """Test that a plain string path is accepted."""
        index = XsdTokenSource(str(FIXTURES / "recursive.xsd")).build_index()

        assert index.sequence_order == {"TNode": ["Label", "Child"]}

    def test_truncated_document_is_malformed(self) -> None:
        """Test that a truncated document keeps the index built before the break."""
        source = source_from(
            f'<xs:schema {XS}><xs:complexType name="A"><xs:sequence>'
            f'<xs:element name="x"/><xs:element name="y"/>'
        )

        with pytest.raises(MalformedInputError) as exc_info:
            source.build_index()

        partial = exc_info.value.partial
        assert partial is not None
        assert partial.complete is False
        assert partial.sequence_order["A"] == ["x", "y"]

    def test_mismatched_tags_are_malformed(self) -> None:
        """Test that a mismatched end tag raises MalformedInputError."""
        source = source_from(f"<xs:schema {XS}><xs:sequence></xs:choice></xs:schema>")

        with pytest.raises(MalformedInputError, match="mismatched tag"):
            list(source.tokens())

    def test_entity_declarations_are_refused(self) -> None:
        """Test that entity declarations are refused as malformed input."""
        source = source_from('<!DOCTYPE x [<!ENTITY e "boom">]><x>&e;</x>')

        with pytest.raises(MalformedInputError, match="refused"):
            list(source.tokens())

    def test_missing_file_raises_os_error(self, tmp_path: Path) -> None:
        """Test that a missing file surfaces as an OSError."""
        with pytest.raises(OSError):
            list(XsdTokenSource(tmp_path / "missing.xsd").tokens())
