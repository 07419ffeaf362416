"""Classify an announcement's lines into general, hero, item and ability notes."""

import logging
from typing import Iterable, Iterator, List

from patchlog.constants import (
    BRACKET_HEADING_PATTERN,
    BULLET_PATTERN,
    STARTS_WITH_ALNUM_PATTERN,
)
from patchlog.ingest.document import Block, BlockKind
from patchlog.models import (
    AbilityOnlyRecord,
    ChangelogContent,
    HeroChangeRecord,
    ItemChangeRecord,
)
from patchlog.processor.line_classifier import OwnerKind, classify_line
from patchlog.processor.scaling import extract_patterns
from patchlog.registry import EntityRegistry

logger = logging.getLogger("patchlog")


def is_candidate_line(line: str) -> bool:
    """Whether a line may carry patch-note content.

    Drops empty lines, bracketed section headings such as "[General]" and
    lines that start with neither a bullet nor a letter or digit.
    """
    if not line or not line.strip():
        return False
    if BRACKET_HEADING_PATTERN.match(line):
        return False
    return bool(BULLET_PATTERN.match(line) or STARTS_WITH_ALNUM_PATTERN.match(line))


def iter_lines(blocks: Iterable[Block]) -> Iterator[str]:
    """Yield the trimmed input lines of a document in order.

    List blocks contribute one entry per item and text blocks their full
    text; either is split further on embedded line breaks.
    """
    for block in blocks:
        entries = block.entries if block.kind is BlockKind.LIST else block.entries[:1]
        for entry in entries:
            for line in entry.split('\n'):
                line = line.strip()
                if line:
                    yield line


def classify_content(blocks: Iterable[Block], registry: EntityRegistry) -> ChangelogContent:
    """Walk a document and bucket every line by owner.

    Lines under labels that match no hero or item land in ``abilities`` so
    author content is never dropped.

    Args:
        blocks: Parsed announcement document.
        registry: Hero and item lookup tables.

    Returns:
        ChangelogContent with scaling patterns annotated on every note.
    """
    content = ChangelogContent()
    skipped: List[str] = []

    for line in iter_lines(blocks):
        if not is_candidate_line(line):
            skipped.append(line)
            continue

        result = classify_line(line, registry)
        if result is None:
            continue

        if result.kind is OwnerKind.GENERAL:
            content.notes.append(extract_patterns(result.text))

        elif result.kind is OwnerKind.HERO:
            hero = content.heroes.get(result.name)
            if hero is None:
                hero = content.heroes[result.name] = HeroChangeRecord(id=result.entity_id)
            if result.text:
                hero.notes.append(extract_patterns(result.text))

        elif result.kind is OwnerKind.ITEM:
            item = content.items.get(result.name)
            if item is None:
                item = content.items[result.name] = ItemChangeRecord(id=result.entity_id)
            if result.text:
                item.notes.append(extract_patterns(result.text))

        elif result.kind is OwnerKind.ABILITY:
            if result.name not in content.abilities:
                logger.debug(f"Unrecognised label bucketed as ability: {result.name!r}")
            bucket = content.abilities.setdefault(result.name, AbilityOnlyRecord())
            if result.text:
                bucket.notes.append(extract_patterns(result.text))

    if skipped:
        logger.debug(f"Skipped {len(skipped)} non-content lines")

    return content
