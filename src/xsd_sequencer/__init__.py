"""XSD Sequencer - Extract declared field order from XML Schema sequences."""

from xsd_sequencer.config import load_config
from xsd_sequencer.errors import CycleDetectedError, MalformedInputError, SchemaOrderError
from xsd_sequencer.generator.go import GoOrderingGenerator, generate_go_ordering
from xsd_sequencer.generator.json_map import generate_json_ordering
from xsd_sequencer.schema.base import NodeClosed, NodeOpened, TokenSource
from xsd_sequencer.schema.xsd import XsdTokenSource
from xsd_sequencer.schema_tree.builder import SchemaWalker
from xsd_sequencer.schema_tree.nodes import OrderMap, SchemaIndex
from xsd_sequencer.schema_tree.resolver import CyclePolicy, OrderResolver, resolve_order

__version__ = "0.1.0"

__all__ = [
    "load_config",
    "SchemaOrderError",
    "MalformedInputError",
    "CycleDetectedError",
    "GoOrderingGenerator",
    "generate_go_ordering",
    "generate_json_ordering",
    "NodeOpened",
    "NodeClosed",
    "TokenSource",
    "XsdTokenSource",
    "SchemaWalker",
    "SchemaIndex",
    "OrderMap",
    "CyclePolicy",
    "OrderResolver",
    "resolve_order",
]
