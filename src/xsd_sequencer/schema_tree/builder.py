"""Schema walker building the path-addressed ordering indexes.

This module consumes a structural token stream in a single forward pass and
records, for every sequence scope, the order in which its fields are declared,
along with the named type each typed field refers to.
"""

import logging
from typing import Iterable, Optional

from xsd_sequencer.errors import MalformedInputError
from xsd_sequencer.schema.base import NodeClosed, NodeOpened, Token
from xsd_sequencer.schema_tree.nodes import IGNORED_NODE_NAMES, NodeKind, SchemaIndex
from xsd_sequencer.schema_tree.path import StructuralPath, join_path, strip_prefix

logger = logging.getLogger(__name__)


class SchemaWalker:
    """Builds a SchemaIndex from a schema token stream.

    A walker holds the state of exactly one walk. Create a new walker for each
    document.

    Attributes:
        path: The structural path of the node currently being visited.
        index: The indexes built so far.
    """

    def __init__(self, ignored_names: Optional[frozenset] = None) -> None:
        """Initialize the walker.

        Args:
            ignored_names: Tags treated as structural markers and elided from
                path keys. Defaults to the standard XSD marker set. Type
                declarations, sequences and fields are classified by their own
                tags, so a field is always keyed by its declared name.
        """
        self.ignored_names = IGNORED_NODE_NAMES if ignored_names is None else ignored_names
        self.path = StructuralPath()
        self.index = SchemaIndex()

    def walk(self, tokens: Iterable[Token]) -> SchemaIndex:
        """Consume a token stream and return the completed index.

        Args:
            tokens: NodeOpened/NodeClosed tokens in document order

        Returns:
            The SchemaIndex for the document

        Raises:
            MalformedInputError: If a node is closed that was never opened, if
                the stream ends with nodes still open, or if the token source
                itself reports malformed input. The partial index is attached
                with ``complete`` set to False.
        """
        try:
            for token in tokens:
                if isinstance(token, NodeOpened):
                    self._open(token)
                elif isinstance(token, NodeClosed):
                    self._close(token)
                else:
                    raise MalformedInputError(f"Unexpected token: {token!r}")
        except MalformedInputError as e:
            self._incomplete(e)
            raise

        if self.path.depth:
            raise self._incomplete(
                MalformedInputError(f"Token stream ended with {self.path.depth} unclosed node(s)")
            )

        return self.index

    def _open(self, token: NodeOpened) -> None:
        kind = NodeKind.classify(token.name, self.ignored_names)
        declared_name = token.attribute("name")
        logical_name = declared_name or token.name
        elided = kind in (NodeKind.SEQUENCE, NodeKind.MARKER)

        if kind is NodeKind.TYPE_DECLARATION:
            if declared_name:
                logger.debug("Registered complex type %s", logical_name)
                self.index.complex_types.add(logical_name)
            else:
                elided = True

        elif kind is NodeKind.SEQUENCE:
            self.index.sequence_order.setdefault(self.path.key, [])

        elif kind is NodeKind.FIELD:
            referenced = strip_prefix(token.attribute("ref"))
            field_name = declared_name or referenced
            if field_name:
                self._record_field(field_name, token.attribute("type"))
                if not declared_name:
                    self.index.field_refs[join_path(self.path.key, field_name)] = referenced
                logical_name = field_name
            else:
                logger.debug("Skipping unnamed element under %r", self.path.key)
                elided = True

        self.path.push(token.name, logical_name, elided)

    def _record_field(self, field_name: str, declared_type: str) -> None:
        scope = self.path.key
        self.index.sequence_order.setdefault(scope, []).append(field_name)

        if declared_type:
            type_name = strip_prefix(declared_type)
            self.index.field_types[join_path(scope, field_name)] = type_name
            logger.debug("Field %s.%s has type %s", scope, field_name, type_name)

    def _close(self, token: NodeClosed) -> None:
        if not self.path.depth:
            raise MalformedInputError(f"Closing node {token.name!r} that was never opened")
        opened = self.path.top
        if token.name and token.name != opened.tag:
            raise MalformedInputError(
                f"Closing node {token.name!r} while {opened.tag!r} is open at {self.path.key!r}"
            )
        self.path.pop()

    def _incomplete(self, error: MalformedInputError) -> MalformedInputError:
        self.index.complete = False
        error.partial = self.index
        logger.debug("Walk stopped early at %r: %s", self.path.key, error)
        return error
