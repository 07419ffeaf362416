"""Decide which changelogs match a filter and what parts of them to show.

Selections and the query combine with AND. Visibility sets use None to mean
"show every entity of this kind" and an empty set to mean "show none"; the
two are never interchangeable. Nothing here mutates a changelog.
"""

import logging
from enum import Enum
from typing import AbstractSet, Iterable, List, Mapping, Optional, Set

from patchlog.filters.criteria import FilterCriteria
from patchlog.models import Changelog, HeroChangeRecord, Note

logger = logging.getLogger("patchlog")


class EntityKind(Enum):
    HERO = "hero"
    ITEM = "item"


def _contains(text: str, query: str) -> bool:
    return query in text.lower()


def _entity_map(changelog: Changelog, kind: EntityKind) -> Mapping[str, object]:
    if kind is EntityKind.HERO:
        return changelog.content.heroes
    return changelog.content.items


def _selection(criteria: FilterCriteria, kind: EntityKind) -> AbstractSet[str]:
    if kind is EntityKind.HERO:
        return criteria.selected_hero_names
    return criteria.selected_item_names


def _other_selection(criteria: FilterCriteria, kind: EntityKind) -> AbstractSet[str]:
    if kind is EntityKind.HERO:
        return criteria.selected_item_names
    return criteria.selected_hero_names


def _entity_notes(record) -> Iterable[Note]:
    yield from record.notes
    if isinstance(record, HeroChangeRecord):
        for ability in record.abilities:
            yield from ability.notes


def matches_general_content(changelog: Changelog, query: str) -> bool:
    """Whether a lower-cased query hits the title or any general note."""
    if not query:
        return False
    if _contains(changelog.title, query):
        return True
    return any(_contains(note.text, query) for note in changelog.content.notes)


def matches(changelog: Changelog, criteria: FilterCriteria) -> bool:
    """Whether a changelog satisfies every active filter clause.

    Every selected hero must have a section, every selected item must have a
    section, and an active query must appear in the title or plain text.
    """
    heroes = changelog.content.heroes
    if any(name not in heroes for name in criteria.selected_hero_names):
        return False

    items = changelog.content.items
    if any(name not in items for name in criteria.selected_item_names):
        return False

    query = criteria.query
    if query and not (_contains(changelog.title, query) or _contains(changelog.plain_text, query)):
        return False

    return True


def filter_changelogs(changelogs: Iterable[Changelog], criteria: FilterCriteria) -> List[Changelog]:
    """Keep the changelogs that match, in input order."""
    result = [c for c in changelogs if matches(c, criteria)]
    logger.debug(f"Filter kept {len(result)} changelogs")
    return result


def visible_names(changelog: Changelog, criteria: FilterCriteria, kind: EntityKind) -> Optional[Set[str]]:
    """Names of one entity kind to expand or highlight in a changelog.

    Args:
        changelog: The changelog being rendered.
        criteria: Active filters.
        kind: Heroes or items.

    Returns:
        None to show every entity of this kind, otherwise the subset of the
        changelog's keys to show (possibly empty).
    """
    selected = _selection(criteria, kind)
    other = _other_selection(criteria, kind)
    query = criteria.query
    entities = _entity_map(changelog, kind)

    if not selected and not query:
        # A filter on the other kind hides this kind entirely
        return set() if other else None

    if selected and not query:
        return {name for name in entities if name in selected}

    if matches_general_content(changelog, query):
        return set(entities)

    found = {
        name
        for name, record in entities.items()
        if _contains(name, query) or any(_contains(n.text, query) for n in _entity_notes(record))
    }
    if selected:
        found &= set(selected)
    return found


def visible_hero_names(changelog: Changelog, criteria: FilterCriteria) -> Optional[Set[str]]:
    return visible_names(changelog, criteria, EntityKind.HERO)


def visible_item_names(changelog: Changelog, criteria: FilterCriteria) -> Optional[Set[str]]:
    return visible_names(changelog, criteria, EntityKind.ITEM)


def _mentioned_only_in_general_notes(changelog: Changelog, name: str, kind: EntityKind) -> bool:
    if name in _entity_map(changelog, kind):
        return False
    needle = name.lower()
    return any(_contains(note.text, needle) for note in changelog.content.notes)


def show_general_notes(changelog: Changelog, criteria: FilterCriteria) -> bool:
    """Whether the general-notes block should be surfaced.

    True when the query hits the title or a general note, or when a selected
    hero or item is mentioned in general notes but has no section of its own.
    """
    if not criteria.is_active:
        return False

    if criteria.has_query and matches_general_content(changelog, criteria.query):
        return True

    for name in criteria.selected_hero_names:
        if _mentioned_only_in_general_notes(changelog, name, EntityKind.HERO):
            return True
    for name in criteria.selected_item_names:
        if _mentioned_only_in_general_notes(changelog, name, EntityKind.ITEM):
            return True

    return False


def filtered_general_notes(changelog: Changelog, criteria: FilterCriteria) -> Optional[List[Note]]:
    """General notes that mention the query or a selected entity.

    Returns:
        None when no filter is active, otherwise the matching notes in order
        (possibly empty).
    """
    if not criteria.is_active:
        return None

    needles = [name.lower() for name in criteria.selected_hero_names | criteria.selected_item_names]
    if criteria.has_query:
        needles.append(criteria.query)

    return [
        note
        for note in changelog.content.notes
        if any(_contains(note.text, needle) for needle in needles)
    ]
