"""End-to-end tests from XSD documents to resolved orders and generated files.

These tests run the whole pipeline (token source, walker, resolver and
generators) over real schema documents and check the complete results.
"""

import io
from pathlib import Path

import pytest

from xsd_sequencer import CycleDetectedError, CyclePolicy, XsdTokenSource, generate_go_ordering

FIXTURES = Path(__file__).parent.parent / "fixtures"

SCHEMA_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    '<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema" xmlns:tns="urn:example">'
)

TYPE_A = (
    '<xs:complexType name="A"><xs:sequence>'
    '<xs:element name="x" type="tns:B"/><xs:element name="y" type="xs:string"/>'
    "</xs:sequence></xs:complexType>"
)

TYPE_B = (
    '<xs:complexType name="B"><xs:sequence>'
    '<xs:element name="m" type="xs:int"/><xs:element name="n" type="xs:int"/>'
    "</xs:sequence></xs:complexType>"
)


def resolve_text(*parts: str, cycle_policy: CyclePolicy = CyclePolicy.FAIL):
    document = SCHEMA_HEADER + "".join(parts) + "</xs:schema>"
    return XsdTokenSource(io.BytesIO(document.encode("utf-8"))).resolve_order(cycle_policy)


@pytest.fixture(scope="module")
def invoice_order():
    return XsdTokenSource(FIXTURES / "invoice.xsd").resolve_order()


def test_invoice_resolved_order(invoice_order) -> None:
    """Test the complete resolved order of the invoice schema."""
    address = ["CountryCode", "Line1", "Street", "City"]
    line = ["Description", "Quantity", "UnitPrice", "TaxRate"]

    assert invoice_order == {
        "": ["Invoice"],
        "Invoice": ["Header", "Seller", "Buyer", "Lines", "Total"],
        "Invoice.Lines": ["Line"],
        "THeader": ["Number", "IssueDate", "Currency"],
        "TParty": ["TaxId", "Name", "Address"],
        "TAddress": address,
        "TLine": line,
        "TEmpty": [],
        "Invoice.Header": ["Number", "IssueDate", "Currency"],
        "Invoice.Seller": ["TaxId", "Name", "Address"],
        "Invoice.Seller.Address": address,
        "Invoice.Buyer": ["TaxId", "Name", "Address"],
        "Invoice.Buyer.Address": address,
        "Invoice.Lines.Line": line,
        "TParty.Address": address,
    }


def test_forward_reference_matches_backward_reference() -> None:
    """Test that declaring B after A resolves exactly like declaring it before."""
    forward = resolve_text(TYPE_A, TYPE_B)
    backward = resolve_text(TYPE_B, TYPE_A)

    assert forward["A"] == backward["A"] == ["x", "y"]
    assert forward["B"] == backward["B"] == ["m", "n"]
    assert forward["A.x"] == backward["A.x"] == ["m", "n"]
    assert set(forward) == set(backward)


def test_wrappers_do_not_change_keys() -> None:
    """Test that annotation and choice wrappers leave keys untouched."""
    wrapped = (
        '<xs:complexType name="A"><xs:annotation><xs:documentation>doc</xs:documentation>'
        "</xs:annotation><xs:sequence><xs:choice>"
        '<xs:element name="x" type="tns:B"/></xs:choice><xs:element name="y" type="xs:string"/>'
        "</xs:sequence></xs:complexType>"
    )

    assert resolve_text(wrapped, TYPE_B) == resolve_text(TYPE_A, TYPE_B)


def test_field_named_documentation_keeps_own_scope() -> None:
    """Test that a field named like a wrapper tag does not leak its children."""
    documented = (
        '<xs:complexType name="A"><xs:sequence>'
        '<xs:element name="documentation"><xs:complexType><xs:sequence>'
        '<xs:element name="z" type="xs:string"/>'
        "</xs:sequence></xs:complexType></xs:element>"
        '<xs:element name="y" type="xs:string"/>'
        "</xs:sequence></xs:complexType>"
    )

    order = resolve_text(documented)

    assert order["A"] == ["documentation", "y"]
    assert order["A.documentation"] == ["z"]


def test_ref_element_resolves_to_global_element() -> None:
    """Test that a ref field path gets the referenced global element's order."""
    signature = (
        '<xs:element name="Signature"><xs:complexType><xs:sequence>'
        '<xs:element name="Value" type="xs:string"/><xs:element name="KeyInfo" type="xs:string"/>'
        "</xs:sequence></xs:complexType></xs:element>"
    )
    doc = (
        '<xs:complexType name="Doc"><xs:sequence>'
        '<xs:element name="Body" type="xs:string"/><xs:element ref="tns:Signature"/>'
        "</xs:sequence></xs:complexType>"
    )

    order = resolve_text(doc, signature)

    assert order["Doc"] == ["Body", "Signature"]
    assert order["Doc.Signature"] == ["Value", "KeyInfo"]


def test_recursive_schema_fails_fast() -> None:
    """Test that a self-referencing type raises under the default policy."""
    with pytest.raises(CycleDetectedError) as exc_info:
        XsdTokenSource(FIXTURES / "recursive.xsd").resolve_order()

    assert exc_info.value.cycle == ["TNode", "TNode"]


def test_recursive_schema_reuses_order() -> None:
    """Test the bounded reuse policy on a self-referencing type."""
    order = XsdTokenSource(FIXTURES / "recursive.xsd").resolve_order(CyclePolicy.REUSE)

    assert order == {"TNode": ["Label", "Child"], "TNode.Child": ["Label", "Child"]}


def test_generated_go_for_invoice(invoice_order) -> None:
    """Test that the generated Go file covers every resolved path."""
    source = generate_go_ordering(invoice_order, FIXTURES / "invoice.xsd")

    assert source.startswith("// this file is generated by go generate.")
    assert "var invoiceChildrenOrder = map[string]map[string]int{" in source
    assert '\t"Invoice.Seller.Address": {"CountryCode": 0, "Line1": 1, "Street": 2, "City": 3},' in source
    assert source.count("\n\t") == len(invoice_order)
