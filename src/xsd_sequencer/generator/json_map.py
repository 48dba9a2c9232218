"""JSON rendering of resolved field orders."""

import json

from xsd_sequencer.schema_tree.nodes import OrderMap


def generate_json_ordering(order_map: OrderMap) -> str:
    """Render a ResolvedOrderMap as a JSON object of path to ordered children.

    Args:
        order_map: The resolved order map

    Returns:
        JSON text with sorted keys, ending with a newline
    """
    return json.dumps(order_map, indent=2, sort_keys=True, ensure_ascii=False) + "\n"
