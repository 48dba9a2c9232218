"""Exceptions raised by xsd-sequencer.

Unresolved type references are deliberately absent here: a field typed as a
primitive or simple type is a normal leaf, not an error.
"""

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from xsd_sequencer.schema_tree.nodes import SchemaIndex


class SchemaOrderError(Exception):
    """Base class for all xsd-sequencer errors."""


class MalformedInputError(SchemaOrderError):
    """The token stream was not well-formed or ended before it was balanced.

    Attributes:
        partial: The indexes built before the walk stopped, flagged as
            incomplete. None when the error was raised before any walk began.
    """

    def __init__(self, message: str, partial: Optional["SchemaIndex"] = None) -> None:
        super().__init__(message)
        self.partial = partial


class CycleDetectedError(SchemaOrderError):
    """A type reference led back to a scope that is still being resolved.

    Attributes:
        cycle: The scopes forming the cycle, starting and ending with the
            revisited scope.
    """

    def __init__(self, cycle: List[str]) -> None:
        super().__init__(f"Cyclic type reference: {' -> '.join(cycle)}")
        self.cycle = cycle
