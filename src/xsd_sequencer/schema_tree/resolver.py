"""Order resolution over a completed schema index.

This module expands the per-scope field orders collected by the walker into a
map covering every reachable field path, by following each field's type
reference (or inline definition) depth-first. Resolution runs only after the
whole document has been walked, so types declared after the fields that use
them resolve exactly like types declared before.
"""

import logging
from enum import Enum
from typing import List, Optional, Set

from xsd_sequencer.errors import CycleDetectedError
from xsd_sequencer.schema_tree.nodes import OrderMap, SchemaIndex
from xsd_sequencer.schema_tree.path import join_path

logger = logging.getLogger(__name__)


class CyclePolicy(str, Enum):
    """What to do when a type reference leads back into a scope being resolved.

    FAIL raises CycleDetectedError. REUSE records the revisited scope's
    declared order at the revisiting path and stops descending there.
    """

    FAIL = "fail"
    REUSE = "reuse"


class OrderResolver:
    """Resolves a SchemaIndex into a ResolvedOrderMap.

    Every key of the sequence index is resolved as a root. For each field of a
    scope that has its own ordered children (through a type reference or an
    inline definition), the child's order is recorded under the field's full
    path, after the child's own fields have been expanded. A scope's own field
    list is never altered.

    Attributes:
        index: The walker output to resolve.
        cycle_policy: How cyclic type references are handled.
    """

    def __init__(self, index: SchemaIndex, cycle_policy: CyclePolicy = CyclePolicy.FAIL) -> None:
        self.index = index
        self.cycle_policy = cycle_policy
        self._resolved: OrderMap = {}
        self._active: List[str] = []
        self._active_set: Set[str] = set()

    def resolve(self) -> OrderMap:
        """Resolve every scope in the index.

        Returns:
            Mapping of path or type name to its ordered immediate children.
            Index keys come first in walk order, followed by the field paths
            reached through references.

        Raises:
            CycleDetectedError: If a cycle is found and the policy is FAIL.
        """
        sequence_order = self.index.sequence_order
        self._resolved = {key: list(order) for key, order in sequence_order.items()}

        for key in list(sequence_order):
            self._expand(key, key)

        logger.debug(
            "Resolved %d keys from %d sequence scopes", len(self._resolved), len(sequence_order)
        )
        return self._resolved

    def _expand(self, path: str, scope: str) -> None:
        """Record ``scope``'s order under ``path`` after expanding its fields."""
        if scope in self._active_set:
            self._revisit(path, scope)
            return

        order = self.index.sequence_order[scope]
        self._active.append(scope)
        self._active_set.add(scope)
        try:
            for field in order:
                child_scope = self._child_scope(scope, field)
                if child_scope is not None:
                    self._expand(join_path(path, field), child_scope)
        finally:
            self._active.pop()
            self._active_set.discard(scope)

        self._resolved[path] = list(order)

    def _child_scope(self, scope: str, field: str) -> Optional[str]:
        """Find the index key holding a field's own children, if any.

        A typed field uses its type's scope, a ``ref`` field the scope of the
        global element it names, and any other field its inline definition.
        """
        field_path = join_path(scope, field)
        type_name = self.index.field_types.get(field_path)

        if type_name is not None:
            if type_name in self.index.sequence_order:
                return type_name
            # Primitive and simple types have no children to expand
            logger.debug("Field %s references leaf type %s", field_path, type_name)
            return None

        referenced = self.index.field_refs.get(field_path)
        if referenced is not None:
            return self._global_element_scope(referenced)

        if field_path in self.index.sequence_order:
            return field_path
        return None

    def _global_element_scope(self, element: str) -> Optional[str]:
        """Find the scope of a global element named by a ``ref`` field."""
        type_name = self.index.field_types.get(element)
        if type_name is not None:
            return type_name if type_name in self.index.sequence_order else None
        if element in self.index.sequence_order:
            return element
        logger.debug("Referenced element %s has no ordered children", element)
        return None

    def _revisit(self, path: str, scope: str) -> None:
        cycle = self._active[self._active.index(scope) :] + [scope]
        if self.cycle_policy is CyclePolicy.FAIL:
            raise CycleDetectedError(cycle)

        logger.debug("Reusing order of %s at %s (cycle %s)", scope, path, " -> ".join(cycle))
        self._resolved[path] = list(self.index.sequence_order[scope])


def resolve_order(index: SchemaIndex, cycle_policy: CyclePolicy = CyclePolicy.FAIL) -> OrderMap:
    """Convenience function to resolve a SchemaIndex into a ResolvedOrderMap.

    Args:
        index: The walker output
        cycle_policy: How cyclic type references are handled

    Returns:
        The ResolvedOrderMap
    """
    return OrderResolver(index, cycle_policy).resolve()
