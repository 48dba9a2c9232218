"""Base token classes for xsd-sequencer.

This module defines the structural token models and the abstract interface for
schema document sources.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, Iterator, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from xsd_sequencer.schema_tree.nodes import OrderMap, SchemaIndex
    from xsd_sequencer.schema_tree.resolver import CyclePolicy


class NodeOpened(BaseModel):
    """A node start event.

    Attributes:
        name: The node's local tag name, without any namespace.
        attributes: The node's attributes keyed by local attribute name.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Local tag name")
    attributes: Dict[str, str] = Field(default_factory=dict, description="Attributes by local name")

    def attribute(self, name: str) -> str:
        """Return an attribute value, or an empty string when it is absent."""
        return self.attributes.get(name, "")


class NodeClosed(BaseModel):
    """A node end event."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Local tag name of the closed node")


Token = Union[NodeOpened, NodeClosed]


class TokenSource(ABC):
    """Abstract base class for anything that can supply a schema token stream.

    Implementations handle opening and decoding a particular kind of document
    and expose it as a single forward pass of NodeOpened/NodeClosed tokens.
    """

    @abstractmethod
    def tokens(self) -> Iterator[Token]:
        """Yield the document's structural tokens in document order.

        Raises:
            NotImplementedError: This method must be implemented by subclasses.
            MalformedInputError: If the underlying document is not well-formed.
        """
        raise NotImplementedError("Subclasses must implement tokens")

    def build_index(self, ignored_names: Optional[frozenset] = None) -> "SchemaIndex":
        """Walk the token stream and return the indexes it describes.

        Args:
            ignored_names: Marker names elided from path keys. Defaults to the
                standard XSD marker set.

        Returns:
            The SchemaIndex built from this source.

        Raises:
            MalformedInputError: If the stream is malformed; the partial index
                is attached to the exception.
        """
        from xsd_sequencer.schema_tree.builder import SchemaWalker

        return SchemaWalker(ignored_names=ignored_names).walk(self.tokens())

    def resolve_order(
        self,
        cycle_policy: Optional["CyclePolicy"] = None,
        ignored_names: Optional[frozenset] = None,
    ) -> "OrderMap":
        """Walk this source and resolve its field orders.

        This is the primary method that should be used by application logic.

        Args:
            cycle_policy: How to treat cyclic type references. Defaults to
                failing fast.
            ignored_names: Marker names elided from path keys.

        Returns:
            The ResolvedOrderMap for this document.

        Raises:
            MalformedInputError: If the stream is malformed.
            CycleDetectedError: If a cycle is found under the fail-fast policy.
        """
        from xsd_sequencer.schema_tree.resolver import CyclePolicy, OrderResolver

        index = self.build_index(ignored_names=ignored_names)
        return OrderResolver(index, cycle_policy or CyclePolicy.FAIL).resolve()
