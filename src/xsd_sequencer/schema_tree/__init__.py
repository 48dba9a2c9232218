"""Schema tree module for walking schemas and resolving field order.

This module provides the walker that indexes declared field orders and the
resolver that expands them along type references.
"""

from xsd_sequencer.schema_tree.builder import SchemaWalker
from xsd_sequencer.schema_tree.nodes import (
    IGNORED_NODE_NAMES,
    NodeKind,
    OrderMap,
    SchemaIndex,
)
from xsd_sequencer.schema_tree.path import StructuralPath
from xsd_sequencer.schema_tree.resolver import CyclePolicy, OrderResolver, resolve_order

__all__ = [
    "IGNORED_NODE_NAMES",
    "NodeKind",
    "OrderMap",
    "SchemaIndex",
    "StructuralPath",
    "SchemaWalker",
    "CyclePolicy",
    "OrderResolver",
    "resolve_order",
]
