"""Go source generation for resolved field orders.

This module renders a ResolvedOrderMap as a Go source file declaring a
``map[string]map[string]int`` from each path to its children's positions, so
generated Go code can sort serialized fields in schema order.
"""

import re
from pathlib import Path
from typing import List, Tuple, Union

from xsd_sequencer.schema_tree.nodes import OrderMap

GENERATED_HEADER = "// this file is generated by go generate. Please do not modify it manually!"

_NON_IDENTIFIER = re.compile(r"[^0-9A-Za-z_]")


def sanitize_identifier(name: str) -> str:
    """Turn an arbitrary name into a valid Go identifier.

    Example: "FA-2" -> "FA_2", "2fa" -> "_2fa"
    """
    identifier = _NON_IDENTIFIER.sub("_", name)
    if not identifier or identifier[0].isdigit():
        identifier = f"_{identifier}"
    return identifier


def package_name_for(schema_file: Union[str, Path]) -> str:
    """Derive the Go package name for a schema file.

    Example: "schemas/FA_2.xsd" -> "fa_2"
    """
    return sanitize_identifier(Path(schema_file).stem.lower())


def _quote(value: str) -> str:
    """Quote a string as a Go interpreted string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class GoOrderingGenerator:
    """Generates a Go source file holding the children order for every path.

    Attributes:
        order_map: The resolved order map to render.
        package_name: Go package clause for the generated file.
        variable_prefix: Prefix of the generated ``<prefix>ChildrenOrder`` variable.
    """

    def __init__(self, order_map: OrderMap, package_name: str, variable_prefix: str):
        self.order_map = order_map
        self.package_name = sanitize_identifier(package_name)
        self.variable_prefix = sanitize_identifier(variable_prefix)

    @property
    def variable_name(self) -> str:
        return f"{self.variable_prefix}ChildrenOrder"

    def generate(self) -> str:
        """Generate the complete Go source.

        Keys are emitted sorted so that regenerating an unchanged schema gives
        an identical file.

        Returns:
            The Go source text, ending with a newline
        """
        lines = [
            GENERATED_HEADER,
            f"package {self.package_name}",
            "",
            f"var {self.variable_name} = map[string]map[string]int{{",
        ]
        lines.extend(self._map_entry(key) for key in sorted(self.order_map))
        lines.append("}")

        return "\n".join(lines) + "\n"

    def _map_entry(self, key: str) -> str:
        positions = ", ".join(
            f"{_quote(child)}: {position}" for position, child in self._unique_children(key)
        )
        return f"\t{_quote(key)}: {{{positions}}},"

    def _unique_children(self, key: str) -> List[Tuple[int, str]]:
        # A Go map literal rejects duplicate keys; keep the first position
        seen = set()
        children = []
        for position, child in enumerate(self.order_map[key]):
            if child not in seen:
                seen.add(child)
                children.append((position, child))
        return children


def generate_go_ordering(order_map: OrderMap, schema_file: Union[str, Path]) -> str:
    """Convenience function to generate the Go ordering file for a schema.

    Args:
        order_map: The resolved order map of the schema
        schema_file: The schema file the map was built from; its name gives
            the package name and the variable prefix

    Returns:
        The Go source text
    """
    generator = GoOrderingGenerator(
        order_map,
        package_name=package_name_for(schema_file),
        variable_prefix=Path(schema_file).stem,
    )
    return generator.generate()
