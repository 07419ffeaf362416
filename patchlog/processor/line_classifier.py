"""Assign a single patch-note line to the hero, item or label that owns it."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from patchlog.constants import BULLET_PATTERN
from patchlog.registry import EntityRegistry


class OwnerKind(Enum):
    """Which bucket of ChangelogContent a line belongs to."""

    HERO = "hero"
    ITEM = "item"
    ABILITY = "ability"  # Unrecognised "Label: text" aside
    GENERAL = "general"


@dataclass(frozen=True)
class LineClassification:
    """Owner of one line plus the text to store under it.

    ``name`` is the registry display name for heroes and items, the label as
    written for ABILITY, and None for GENERAL. ``entity_id`` is set only for
    heroes and items.
    """

    kind: OwnerKind
    text: str
    name: Optional[str] = None
    entity_id: Optional[int] = None


def strip_bullet(line: str) -> str:
    """Remove a leading list marker and surrounding whitespace."""
    return BULLET_PATTERN.sub('', line, count=1).strip()


def classify_line(raw_line: str, registry: EntityRegistry) -> Optional[LineClassification]:
    """Classify one raw line.

    Args:
        raw_line: Line as it appears in the announcement, bullet included.
        registry: Hero and item lookup tables.

    Returns:
        The line's owner and text, or None when nothing is left once the
        bullet is stripped.
    """
    text = strip_bullet(raw_line)
    if not text:
        return None

    if ':' not in text:
        return LineClassification(kind=OwnerKind.GENERAL, text=text)

    prefix, suffix = text.split(':', 1)
    prefix = prefix.strip()
    suffix = suffix.strip()

    hero = registry.find_hero(prefix)
    if hero:
        return LineClassification(kind=OwnerKind.HERO, text=suffix, name=hero.name, entity_id=hero.id)

    item = registry.find_item(prefix)
    if item:
        return LineClassification(kind=OwnerKind.ITEM, text=suffix, name=item.name, entity_id=item.id)

    if not prefix:
        # A leading colon names no owner
        return LineClassification(kind=OwnerKind.GENERAL, text=text)

    return LineClassification(kind=OwnerKind.ABILITY, text=suffix, name=prefix)
