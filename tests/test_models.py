"""Tests for the changelog model's persisted shape."""

from datetime import datetime, timezone

import pytest

from patchlog.models import (
    AbilityChange,
    Changelog,
    ChangelogContent,
    HeroChangeRecord,
    Note,
    ScalingPattern,
)


class TestChangelogContent:
    """Tests for ChangelogContent serialization."""

    def test_empty_shape(self):
        """Test that every bucket is always present."""
        assert ChangelogContent().to_dict() == {"notes": [], "heroes": {}, "items": {}, "abilities": {}}

    def test_hero_shape_uses_camel_case(self):
        content = ChangelogContent(heroes={
            "Infernus": HeroChangeRecord(
                id=1,
                abilities=[AbilityChange(
                    ability_name="Fireball",
                    ability_image="https://cdn.test/fireball.png",
                    notes=[Note(text="Damage 10 to 12", patterns=[ScalingPattern("10 to 12", 7, 15)])],
                )],
            ),
        })

        assert content.to_dict()["heroes"]["Infernus"] == {
            "id": 1,
            "notes": [],
            "abilities": [{
                "abilityName": "Fireball",
                "abilityImage": "https://cdn.test/fireball.png",
                "notes": [{"text": "Damage 10 to 12", "patterns": [{"text": "10 to 12", "start": 7, "end": 15}]}],
            }],
        }

    def test_from_dict_restores_content(self, sample_content):
        """Test reading the persisted shape back."""
        content = ChangelogContent.from_dict(sample_content)

        assert content.heroes["Abrams"].abilities[0].ability_name == "Siphon Life"
        assert content.items["Metal Skin"].id == 102
        assert content.to_dict() == sample_content

    def test_from_dict_tolerates_missing_buckets(self):
        content = ChangelogContent.from_dict({"notes": [{"text": "Only prose"}]})

        assert content.notes[0].patterns == []
        assert content.heroes == {}

    @pytest.mark.parametrize("data", [
        [],
        {"heroes": {"Abrams": {"notes": []}}},
        {"notes": [{"patterns": []}]},
        {"items": {"Metal Skin": "not a record"}},
    ])
    def test_from_dict_rejects_malformed(self, data):
        """Test that malformed content raises ValueError."""
        with pytest.raises(ValueError):
            ChangelogContent.from_dict(data)


class TestChangelog:
    """Tests for Changelog records."""

    def test_to_dict(self, make_changelog):
        changelog = make_changelog({"notes": [{"text": "Fixes", "patterns": []}]})

        data = changelog.to_dict()

        assert data["id"] == "1001"
        assert data["date"] == "2025-05-08T00:00:00+00:00"
        assert data["plainText"] == "Fixes"
        assert "parentId" not in data

    def test_update_carries_parent(self):
        """Test that follow-up updates record their parent."""
        changelog = Changelog(
            id="1001-update-1",
            title="Patch - Update 1",
            date=datetime(2025, 5, 9, tzinfo=timezone.utc),
            author="Yoshi",
            content=ChangelogContent(),
            parent_id="1001",
        )

        restored = Changelog.from_dict(changelog.to_dict())

        assert restored.to_dict()["parentId"] == "1001"
        assert restored == changelog

    def test_is_immutable(self, make_changelog):
        changelog = make_changelog()

        with pytest.raises(AttributeError):
            changelog.title = "Changed"

    def test_from_dict_missing_date(self):
        with pytest.raises(ValueError):
            Changelog.from_dict({"id": "1", "title": "No date"})
