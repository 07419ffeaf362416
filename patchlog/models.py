"""Changelog content model and its persisted JSON shape."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ScalingPattern:
    """A numeric span inside a note's text, flagged for emphasis."""

    text: str
    start: int
    end: int

    def to_dict(self) -> dict:
        return {"text": self.text, "start": self.start, "end": self.end}


@dataclass
class Note:
    """One line of patch-note text with its scaling patterns."""

    text: str
    patterns: List[ScalingPattern] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "patterns": [p.to_dict() for p in self.patterns],
        }


@dataclass
class AbilityChange:
    """Notes about one ability of a hero."""

    ability_name: str
    ability_image: str
    notes: List[Note] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "abilityName": self.ability_name,
            "abilityImage": self.ability_image,
            "notes": [n.to_dict() for n in self.notes],
        }


@dataclass
class HeroChangeRecord:
    """Everything one changelog says about a hero.

    ``notes`` holds hero-general lines; lines about a specific ability live in
    ``abilities``. A note is never in both.
    """

    id: int
    notes: List[Note] = field(default_factory=list)
    abilities: List[AbilityChange] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "notes": [n.to_dict() for n in self.notes],
            "abilities": [a.to_dict() for a in self.abilities],
        }


@dataclass
class ItemChangeRecord:
    """Everything one changelog says about an item."""

    id: int
    notes: List[Note] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"id": self.id, "notes": [n.to_dict() for n in self.notes]}


@dataclass
class AbilityOnlyRecord:
    """Notes under a label that matched no known hero or item."""

    notes: List[Note] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"notes": [n.to_dict() for n in self.notes]}


@dataclass
class ChangelogContent:
    """Classified content of one announcement.

    Hero and item keys are the registry's display names; abilities are keyed by
    the label as the author wrote it.
    """

    notes: List[Note] = field(default_factory=list)
    heroes: Dict[str, HeroChangeRecord] = field(default_factory=dict)
    items: Dict[str, ItemChangeRecord] = field(default_factory=dict)
    abilities: Dict[str, AbilityOnlyRecord] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Serialize to the persisted content_json shape."""
        return {
            "notes": [n.to_dict() for n in self.notes],
            "heroes": {name: hero.to_dict() for name, hero in self.heroes.items()},
            "items": {name: item.to_dict() for name, item in self.items.items()},
            "abilities": {name: rec.to_dict() for name, rec in self.abilities.items()},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ChangelogContent":
        """Rebuild content from its persisted shape.

        Raises:
            ValueError: If the data does not have the persisted shape.
        """
        if not isinstance(data, dict):
            raise ValueError(f"content must be an object, got {type(data).__name__}")

        try:
            heroes = {}
            for name, hero in (data.get("heroes") or {}).items():
                heroes[name] = HeroChangeRecord(
                    id=int(hero["id"]),
                    notes=_notes_from_list(hero.get("notes")),
                    abilities=[
                        AbilityChange(
                            ability_name=ability["abilityName"],
                            ability_image=ability["abilityImage"],
                            notes=_notes_from_list(ability.get("notes")),
                        )
                        for ability in hero.get("abilities") or []
                    ],
                )

            items = {
                name: ItemChangeRecord(id=int(item["id"]), notes=_notes_from_list(item.get("notes")))
                for name, item in (data.get("items") or {}).items()
            }

            abilities = {
                name: AbilityOnlyRecord(notes=_notes_from_list(rec.get("notes")))
                for name, rec in (data.get("abilities") or {}).items()
            }

            return cls(
                notes=_notes_from_list(data.get("notes")),
                heroes=heroes,
                items=items,
                abilities=abilities,
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Malformed changelog content: {e!r}") from e


def _notes_from_list(raw: Optional[List[dict]]) -> List[Note]:
    notes = []
    for entry in raw or []:
        patterns = [
            ScalingPattern(text=p["text"], start=int(p["start"]), end=int(p["end"]))
            for p in entry.get("patterns") or []
        ]
        notes.append(Note(text=entry["text"], patterns=patterns))
    return notes


@dataclass(frozen=True)
class Changelog:
    """A classified game-update announcement."""

    id: str
    title: str
    date: datetime
    author: str
    content: ChangelogContent
    plain_text: str = ""
    parent_id: Optional[str] = None  # Set for author follow-up updates

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "title": self.title,
            "date": self.date.isoformat(),
            "author": self.author,
            "content": self.content.to_dict(),
            "plainText": self.plain_text,
        }
        if self.parent_id:
            data["parentId"] = self.parent_id
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Changelog":
        """Rebuild a changelog record.

        Raises:
            ValueError: If required fields are missing or malformed.
        """
        try:
            return cls(
                id=str(data["id"]),
                title=data.get("title") or "",
                date=datetime.fromisoformat(data["date"]),
                author=data.get("author") or "",
                content=ChangelogContent.from_dict(data.get("content") or {}),
                plain_text=data.get("plainText") or "",
                parent_id=data.get("parentId"),
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed changelog record: {e!r}") from e
