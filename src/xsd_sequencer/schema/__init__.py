"""Schema token source modules."""

from xsd_sequencer.schema.base import NodeClosed, NodeOpened, Token, TokenSource
from xsd_sequencer.schema.xsd import XsdTokenSource

__all__ = ["NodeOpened", "NodeClosed", "Token", "TokenSource", "XsdTokenSource"]
