"""Readers for already-fetched announcement markup."""

from .document import Block, BlockKind, parse_html

__all__ = ["Block", "BlockKind", "parse_html"]
