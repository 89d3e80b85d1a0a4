"""
Entity registry for sqlcraft.

This module loads entity definitions from a YAML (or JSON) file and builds the
matching query view classes.
"""

from .loader import (
    ENTITIES_SCHEMA,
    Registry,
    load_config,
    make_entity,
)

__all__ = [
    "ENTITIES_SCHEMA",
    "Registry",
    "load_config",
    "make_entity",
]
