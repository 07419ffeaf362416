"""Build immutable Changelog records from fetched announcements."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from patchlog.constants import DEFAULT_ABILITY_MATCH_POLICY
from patchlog.ingest.document import parse_html
from patchlog.models import Changelog, ChangelogContent
from patchlog.processor.ability_extractor import refine
from patchlog.processor.content_classifier import classify_content
from patchlog.registry import EntityRegistry

logger = logging.getLogger("patchlog")


@dataclass
class AnnouncementReply:
    """A follow-up post by the announcement's author."""

    html: str
    timestamp: Optional[datetime] = None


@dataclass
class Announcement:
    """An already-fetched patch-note forum post."""

    post_id: str
    title: str
    author: str
    pub_date: datetime
    html: str
    replies: List[AnnouncementReply] = field(default_factory=list)


def render_plain_text(content: ChangelogContent) -> str:
    """Render classified content as searchable plain text.

    General notes come first, then one ``Owner: note`` line per hero, hero
    ability, item and unrecognised-label note.
    """
    lines = [note.text for note in content.notes]

    for name, hero in content.heroes.items():
        lines.extend(f"{name}: {note.text}" for note in hero.notes)
        for ability in hero.abilities:
            lines.extend(f"{name}: {ability.ability_name}: {note.text}" for note in ability.notes)

    for name, item in content.items.items():
        lines.extend(f"{name}: {note.text}" for note in item.notes)

    for label, record in content.abilities.items():
        lines.extend(f"{label}: {note.text}" for note in record.notes)

    return "\n".join(lines)


def classify_announcement_html(
    html: str,
    registry: EntityRegistry,
    policy: str = DEFAULT_ABILITY_MATCH_POLICY,
) -> ChangelogContent:
    """Run the document reader, line classification and ability extraction."""
    content = classify_content(parse_html(html), registry)
    return refine(content, registry.abilities, policy)


def build_changelogs(
    announcement: Announcement,
    registry: EntityRegistry,
    policy: str = DEFAULT_ABILITY_MATCH_POLICY,
) -> List[Changelog]:
    """Classify an announcement and its author replies.

    Each non-empty reply becomes its own changelog with id
    ``<post_id>-update-<n>`` and the post as parent.

    Args:
        announcement: The fetched post.
        registry: Hero, item and ability lookup tables.
        policy: Ability match policy passed to the extractor.

    Returns:
        The post's changelog followed by one changelog per update.
    """
    content = classify_announcement_html(announcement.html, registry, policy)
    changelogs = [
        Changelog(
            id=announcement.post_id,
            title=announcement.title,
            date=announcement.pub_date,
            author=announcement.author,
            content=content,
            plain_text=render_plain_text(content),
        )
    ]

    for i, reply in enumerate(announcement.replies, 1):
        if not reply.html or not reply.html.strip():
            continue

        reply_content = classify_announcement_html(reply.html, registry, policy)
        changelogs.append(Changelog(
            id=f"{announcement.post_id}-update-{i}",
            title=f"{announcement.title} - Update {i}",
            date=reply.timestamp or announcement.pub_date,
            author=announcement.author,
            content=reply_content,
            plain_text=render_plain_text(reply_content),
            parent_id=announcement.post_id,
        ))

    logger.info(
        f"Built {len(changelogs)} changelog(s) for {announcement.post_id}: "
        f"{len(content.heroes)} heroes, {len(content.items)} items, "
        f"{len(content.notes)} general notes"
    )
    return changelogs
