"""Read-time filtering and visibility of classified changelogs."""

from .criteria import FilterCriteria, parse_csv
from .visibility import (
    EntityKind,
    filter_changelogs,
    filtered_general_notes,
    matches,
    show_general_notes,
    visible_hero_names,
    visible_item_names,
    visible_names,
)

__all__ = [
    "FilterCriteria",
    "parse_csv",
    "EntityKind",
    "filter_changelogs",
    "filtered_general_notes",
    "matches",
    "show_general_notes",
    "visible_hero_names",
    "visible_item_names",
    "visible_names",
]
