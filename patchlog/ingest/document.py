"""Turn announcement HTML into the block/list document consumed by the classifier."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

logger = logging.getLogger("patchlog")

LIST_TAGS = {"ul", "ol"}
WRAPPER_TAGS = {"html", "body", "div", "section", "article", "blockquote", "main"}
DISCARD_TAGS = ["script", "style", "noscript", "template"]

# Descendants that make a wrapper worth descending into
NESTED_BLOCK_TAGS = sorted(LIST_TAGS | WRAPPER_TAGS | {"p"})


class BlockKind(Enum):
    LIST = "list"
    TEXT = "text"


@dataclass
class Block:
    """A top-level node of an announcement.

    A LIST block holds one entry per list item; a TEXT block holds a single
    entry with the node's full text. Entries may contain line breaks.
    """

    kind: BlockKind
    entries: List[str] = field(default_factory=list)

    @classmethod
    def from_text(cls, value: str) -> "Block":
        return cls(kind=BlockKind.TEXT, entries=[value])

    @classmethod
    def from_items(cls, values: List[str]) -> "Block":
        return cls(kind=BlockKind.LIST, entries=list(values))


def parse_html(html: str) -> List[Block]:
    """Parse announcement HTML into blocks in document order.

    Args:
        html: Post body HTML.

    Returns:
        List of Block objects; empty for empty input.
    """
    if not html or not html.strip():
        return []

    soup = BeautifulSoup(html, 'html.parser')
    for tag in soup.find_all(DISCARD_TAGS):
        tag.decompose()
    for br in soup.find_all('br'):
        br.replace_with('\n')

    blocks: List[Block] = []
    _walk_children(soup, blocks)
    logger.debug(f"Parsed {len(blocks)} blocks from announcement HTML")
    return blocks


def _walk_children(parent: Tag, blocks: List[Block]) -> None:
    for child in parent.children:
        if isinstance(child, Comment):
            continue
        if isinstance(child, NavigableString):
            if child.strip():
                blocks.append(Block.from_text(str(child)))
            continue
        if not isinstance(child, Tag):
            continue
        _walk_node(child, blocks)


def _walk_node(node: Tag, blocks: List[Block]) -> None:
    name = node.name.lower()

    if name in LIST_TAGS:
        items = [_item_text(li) for li in node.find_all('li')]
        blocks.append(Block.from_items([item for item in items if item.strip()]))
        return

    if name in WRAPPER_TAGS and node.find(NESTED_BLOCK_TAGS):
        _walk_children(node, blocks)
        return

    text = node.get_text()
    if text.strip():
        blocks.append(Block.from_text(text))


def _item_text(li: Tag) -> str:
    """Text of a list item without the text of lists nested inside it."""
    parts = []
    for child in li.children:
        if isinstance(child, Tag):
            if child.name.lower() in LIST_TAGS:
                continue
            parts.append(child.get_text())
        elif isinstance(child, NavigableString) and not isinstance(child, Comment):
            parts.append(str(child))
    return ''.join(parts)
