"""Patch-note classification: scaling patterns, line owners and ability groups."""

from .scaling import extract_patterns
from .line_classifier import OwnerKind, LineClassification, classify_line
from .content_classifier import classify_content
from .ability_extractor import refine
from .builder import Announcement, AnnouncementReply, build_changelogs, render_plain_text

__all__ = [
    "extract_patterns",
    "OwnerKind",
    "LineClassification",
    "classify_line",
    "classify_content",
    "refine",
    "Announcement",
    "AnnouncementReply",
    "build_changelogs",
    "render_plain_text",
]
