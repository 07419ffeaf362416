"""Pytest configuration and shared fixtures."""

import pytest
from datetime import datetime, timezone
from pathlib import Path

# Add project root to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def catalog_heroes():
    """Hero records as published by the game API."""
    return [
        {"id": 6, "name": "Abrams", "class_name": "hero_atlas"},
        {"id": 15, "name": "Bebop", "class_name": "hero_bebop"},
        {"id": 1, "name": "Infernus", "class_name": "hero_inferno"},
        {"id": 2, "name": "Seven", "class_name": "hero_gigawatt"},
        {"id": 13, "name": "Haze", "class_name": "hero_haze"},
    ]


@pytest.fixture
def catalog_items():
    """Item records, including ability-typed entries."""
    return [
        {"id": 101, "name": "Superior Stamina", "type": "upgrade", "shop_image": "https://cdn.test/stamina.png"},
        {"id": 102, "name": "Metal Skin", "type": "upgrade", "shop_image_webp": "https://cdn.test/metal.webp"},
        {"id": 201, "name": "Siphon Life", "type": "ability", "image": "https://cdn.test/siphon.png",
         "image_webp": "https://cdn.test/siphon.webp"},
        {"id": 202, "name": "Shoulder Charge", "type": "ability", "image": "https://cdn.test/charge.png"},
        {"id": 203, "name": "Fireball", "type": "ability", "image": "https://cdn.test/fireball.png"},
        {"id": 204, "name": "Kinetic Pulse", "type": "ability", "image": "https://cdn.test/pulse.png"},
    ]


@pytest.fixture
def registry(catalog_heroes, catalog_items):
    """Registry built from the sample catalog."""
    from patchlog.registry import EntityRegistry
    return EntityRegistry.from_catalog(catalog_heroes, catalog_items)


@pytest.fixture
def make_changelog():
    """Factory for Changelog records built from content dicts."""
    from patchlog.models import Changelog, ChangelogContent
    from patchlog.processor.builder import render_plain_text

    def _make(content=None, title="Gameplay Update", changelog_id="1001"):
        parsed = ChangelogContent.from_dict(content or {})
        return Changelog(
            id=changelog_id,
            title=title,
            date=datetime(2025, 5, 8, tzinfo=timezone.utc),
            author="Yoshi",
            content=parsed,
            plain_text=render_plain_text(parsed),
        )

    return _make


@pytest.fixture
def sample_content():
    """Content dict with general notes, two heroes and one item."""
    return {
        "notes": [
            {"text": "General bug fixes", "patterns": []},
            {"text": "Seven's lightning visuals were updated", "patterns": []},
        ],
        "heroes": {
            "Infernus": {
                "id": 1,
                "notes": [{"text": "Base health increased from 550 to 600", "patterns": []}],
                "abilities": [],
            },
            "Abrams": {
                "id": 6,
                "notes": [{"text": "Base bullet damage reduced", "patterns": []}],
                "abilities": [{
                    "abilityName": "Siphon Life",
                    "abilityImage": "https://cdn.test/siphon.webp",
                    "notes": [{"text": "Radius reduced from 10m to 9m", "patterns": []}],
                }],
            },
        },
        "items": {
            "Metal Skin": {"id": 102, "notes": [{"text": "Duration increased", "patterns": []}]},
        },
        "abilities": {},
    }
