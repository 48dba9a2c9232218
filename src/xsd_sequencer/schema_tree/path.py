"""Structural path tracking for the schema walk."""

from typing import List, NamedTuple


def strip_prefix(qualified_name: str) -> str:
    """Strip a namespace prefix such as ``tns:`` from a qualified name.

    Example: "tns:TAdres" -> "TAdres"
    """
    return qualified_name.rpartition(":")[2]


def join_path(path: str, name: str) -> str:
    """Append a name to a normalized path, the document root being ``""``."""
    return f"{path}.{name}" if path else name


class PathFrame(NamedTuple):
    """One open node on the path stack.

    Attributes:
        tag: The node's local tag name, matched against its closing token.
        name: The node's logical name.
        elided: Whether the node is a structural wrapper left out of the key.
    """

    tag: str
    name: str
    elided: bool


class StructuralPath:
    """A stack of open nodes with a normalized key.

    The caller decides, once per node, whether it is a structural wrapper;
    the key is recomputed on every push and pop from the names of the frames
    that are not elided. Wrappers such as ``sequence`` or an anonymous
    ``complexType`` never show up in it, while a field is always keyed by its
    declared name, whatever that name is.

    Attributes:
        key: The dot-joined normalized path for the current stack.
    """

    def __init__(self) -> None:
        self._stack: List[PathFrame] = []
        self.key = ""

    def push(self, tag: str, name: str, elided: bool = False) -> None:
        self._stack.append(PathFrame(tag, name, elided))
        self.key = self._normalize()

    def pop(self) -> PathFrame:
        """Pop the innermost frame.

        Raises:
            IndexError: If the stack is already empty.
        """
        frame = self._stack.pop()
        self.key = self._normalize()
        return frame

    @property
    def top(self) -> PathFrame:
        """The innermost frame.

        Raises:
            IndexError: If the stack is empty.
        """
        return self._stack[-1]

    @property
    def depth(self) -> int:
        return len(self._stack)

    def _normalize(self) -> str:
        return ".".join(frame.name for frame in self._stack if not frame.elided)

    def __repr__(self) -> str:
        return f"StructuralPath(stack={self._stack!r}, key={self.key!r})"
