"""Node kinds and index models produced by the schema walk.

This module defines the closed set of node kinds the walker reacts to and the
index structures it fills in, kept separate from both the token source and
the order resolution logic.
"""

from enum import Enum
from typing import Dict, List, Set

from pydantic import BaseModel, ConfigDict, Field

COMPLEX_TYPE_TAG = "complexType"
SEQUENCE_TAG = "sequence"
ELEMENT_TAG = "element"

IGNORED_NODE_NAMES = frozenset(
    {
        "schema",
        COMPLEX_TYPE_TAG,
        SEQUENCE_TAG,
        ELEMENT_TAG,
        "enumeration",
        "annotation",
        "choice",
        "restriction",
        "documentation",
    }
)


class NodeKind(str, Enum):
    """The structurally meaningful kinds of schema node.

    A token's kind is decided once from its tag and carried with it, so the
    walker never has to compare tag strings again.
    """

    TYPE_DECLARATION = "type_declaration"
    SEQUENCE = "sequence"
    FIELD = "field"
    MARKER = "marker"
    OTHER = "other"

    @classmethod
    def classify(cls, tag: str, ignored_names: frozenset = IGNORED_NODE_NAMES) -> "NodeKind":
        """Classify a tag local name into a node kind.

        Args:
            tag: The local (namespace-free) tag name
            ignored_names: Names treated as purely structural markers

        Returns:
            The matching NodeKind
        """
        if tag == COMPLEX_TYPE_TAG:
            return cls.TYPE_DECLARATION
        if tag == SEQUENCE_TAG:
            return cls.SEQUENCE
        if tag == ELEMENT_TAG:
            return cls.FIELD
        if tag in ignored_names:
            return cls.MARKER
        return cls.OTHER


class SchemaIndex(BaseModel):
    """The path-addressed indexes built by a single walk over one document.

    Attributes:
        complex_types: Names declared as complex types in the document.
        sequence_order: Normalized path to the field names declared under
            that path's nearest sequence, in document order.
        field_types: ``path.field`` to the referenced type name, namespace
            prefix stripped. Only fields with an explicit type are present.
        field_refs: ``path.field`` to the global element a ``ref`` field
            stands for, namespace prefix stripped.
        complete: False when the walk stopped on malformed input.
    """

    model_config = ConfigDict(frozen=False)

    complex_types: Set[str] = Field(default_factory=set, description="Declared complex types")
    sequence_order: Dict[str, List[str]] = Field(
        default_factory=dict, description="Declared field order per sequence scope"
    )
    field_types: Dict[str, str] = Field(
        default_factory=dict, description="Type referenced by each typed field path"
    )
    field_refs: Dict[str, str] = Field(
        default_factory=dict, description="Global element named by each reference-only field path"
    )
    complete: bool = Field(default=True, description="Whether the walk reached a balanced end")


OrderMap = Dict[str, List[str]]
