"""Coverage diagnostics for resolved field orders.

This module reports how much of a schema's declared type graph ended up with a
resolved order: complex types that never declared a sequence, and typed fields
whose type has no ordered children. None of these findings are errors; leaf
references to primitive or simple types are expected in every schema.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from xsd_sequencer.schema_tree.nodes import OrderMap, SchemaIndex


class CoverageReport(BaseModel):
    """Result of an OrderCoverageValidator run.

    Attributes:
        complete: Whether the walk reached a balanced end of the document.
        resolved_keys: Number of keys in the resolved order map.
        unsequenced_types: Declared complex types with no sequence scope.
        leaf_references: Field path to type for references without ordered children.
        undeclared_references: The leaf references whose type is not a declared
            complex type (usually built-in or simple types).
    """

    model_config = ConfigDict(frozen=False)

    complete: bool = Field(..., description="Whether the walk completed")
    resolved_keys: int = Field(..., description="Number of resolved keys")
    unsequenced_types: List[str] = Field(default_factory=list)
    leaf_references: Dict[str, str] = Field(default_factory=dict)
    undeclared_references: Dict[str, str] = Field(default_factory=dict)


class OrderCoverageValidator:
    """Checks a SchemaIndex and its ResolvedOrderMap against the declared types.

    Attributes:
        index: The walker output for the document.
        order_map: The resolver output for the same document.
    """

    def __init__(self, index: SchemaIndex, order_map: OrderMap) -> None:
        self.index = index
        self.order_map = order_map

    def validate(self) -> CoverageReport:
        """Build the coverage report.

        Returns:
            A CoverageReport; lists and mappings are sorted for stable output.
        """
        sequence_order = self.index.sequence_order

        unsequenced = sorted(name for name in self.index.complex_types if name not in sequence_order)

        leaf_references = {
            path: type_name
            for path, type_name in sorted(self.index.field_types.items())
            if type_name not in sequence_order
        }
        undeclared = {
            path: type_name
            for path, type_name in leaf_references.items()
            if type_name not in self.index.complex_types
        }

        return CoverageReport(
            complete=self.index.complete,
            resolved_keys=len(self.order_map),
            unsequenced_types=unsequenced,
            leaf_references=leaf_references,
            undeclared_references=undeclared,
        )
