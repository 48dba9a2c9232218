"""End-to-end example for xsd-sequencer.

This example demonstrates the complete workflow of:
1. Walking an XSD schema into its ordering indexes
2. Resolving the field order of every reachable path
3. Checking order coverage and rendering a Go ordering file

Usage:
    python examples/end_to_end_example.py tests/fixtures/invoice.xsd
"""

import sys
from pathlib import Path

from xsd_sequencer.generator.go import generate_go_ordering
from xsd_sequencer.schema.xsd import XsdTokenSource
from xsd_sequencer.schema_tree.resolver import CyclePolicy, OrderResolver
from xsd_sequencer.validator.coverage import OrderCoverageValidator


def run_end_to_end_example(schema_file: Path) -> None:
    """Run the complete xsd-sequencer workflow on one schema.

    Args:
        schema_file: Path to the .xsd file to process

    Raises:
        MalformedInputError: If the schema is not well-formed
    """
    print("=" * 80)
    print("XSD Sequencer End-to-End Example")
    print("=" * 80)
    print(f"\nProcessing schema: {schema_file}\n")

    # -------------------------------------------------------------------------
    # Step 1: Walk the schema
    # -------------------------------------------------------------------------
    print("Step 1: Walking schema...")
    index = XsdTokenSource(schema_file).build_index()
    print(f"  {len(index.complex_types)} complex types, {len(index.sequence_order)} sequences\n")

    # -------------------------------------------------------------------------
    # Step 2: Resolve field order, reusing partial orders on recursive types
    # -------------------------------------------------------------------------
    print("Step 2: Resolving field order...")
    order_map = OrderResolver(index, CyclePolicy.REUSE).resolve()
    for path, children in order_map.items():
        print(f"  {path or '<root>'}: {', '.join(children)}")
    print()

    # -------------------------------------------------------------------------
    # Step 3: Coverage and generated Go source
    # -------------------------------------------------------------------------
    print("Step 3: Checking coverage...")
    report = OrderCoverageValidator(index, order_map).validate()
    print(f"  Complex types without a sequence: {report.unsequenced_types or 'none'}\n")

    print(generate_go_ordering(order_map, schema_file))


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python examples/end_to_end_example.py SCHEMA.xsd")
        sys.exit(1)
    run_end_to_end_example(Path(sys.argv[1]))
