"""
High-level API: snapshot export and import.
"""

from .export import (
    world_to_dict,
    world_from_dict,
    save_world_json,
    load_world_json,
    save_report_json,
)

__all__ = [
    "world_to_dict",
    "world_from_dict",
    "save_world_json",
    "load_world_json",
    "save_report_json",
]
