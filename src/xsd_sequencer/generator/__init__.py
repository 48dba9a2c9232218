"""Ordering artifact generation modules."""

from xsd_sequencer.generator.go import (
    GoOrderingGenerator,
    generate_go_ordering,
    package_name_for,
)
from xsd_sequencer.generator.json_map import generate_json_ordering

__all__ = [
    "GoOrderingGenerator",
    "generate_go_ordering",
    "generate_json_ordering",
    "package_name_for",
]
