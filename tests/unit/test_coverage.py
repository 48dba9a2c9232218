"""Unit tests for the order coverage validator."""

from pathlib import Path

from xsd_sequencer.schema.xsd import XsdTokenSource
from xsd_sequencer.schema_tree.nodes import SchemaIndex
from xsd_sequencer.schema_tree.resolver import OrderResolver
from xsd_sequencer.validator.coverage import OrderCoverageValidator

FIXTURES = Path(__file__).parent.parent / "fixtures"


def test_coverage_of_invoice_schema():
    """Test the coverage report for the invoice fixture."""
    index = XsdTokenSource(FIXTURES / "invoice.xsd").build_index()
    order_map = OrderResolver(index).resolve()

    report = OrderCoverageValidator(index, order_map).validate()

    assert report.complete is True
    assert report.resolved_keys == len(order_map)
    assert report.unsequenced_types == ["TAmount"]
    assert report.leaf_references["Invoice.Total"] == "TAmount"
    assert report.leaf_references["THeader.Currency"] == "TCurrency"
    assert "Invoice.Total" not in report.undeclared_references
    assert report.undeclared_references["THeader.Currency"] == "TCurrency"
    assert report.undeclared_references["TLine.Quantity"] == "decimal"
    assert "Invoice.Header" not in report.leaf_references


def test_coverage_reports_incomplete_index():
    """Test that an incomplete index is reported as such."""
    index = SchemaIndex(sequence_order={"A": ["x"]}, complete=False)

    report = OrderCoverageValidator(index, {"A": ["x"]}).validate()

    assert report.complete is False
    assert report.unsequenced_types == []
    assert report.leaf_references == {}
