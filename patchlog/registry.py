"""Hero, item and ability lookup tables built from the game catalog."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from patchlog.constants import ABILITY_ITEM_TYPE

logger = logging.getLogger("patchlog")


@dataclass(frozen=True)
class Entity:
    """A hero or item known to the catalog."""

    id: int
    name: str


@dataclass(frozen=True)
class Ability:
    """An ability-typed catalog item that can own hero notes."""

    name: str
    image: str


class EntityRegistry:
    """Case-insensitive name lookups for heroes, items and abilities.

    Iteration order follows the catalog. When two names differ only by case,
    the first one wins, so lookups always return the catalog's display name.
    """

    def __init__(
        self,
        heroes: Optional[Mapping[str, int]] = None,
        items: Optional[Mapping[str, int]] = None,
        abilities: Optional[Iterable[Ability]] = None,
    ):
        self.heroes = MappingProxyType(dict(heroes or {}))
        self.items = MappingProxyType(dict(items or {}))
        self.abilities: Tuple[Ability, ...] = tuple(abilities or ())
        self._hero_index = _casefold_index(self.heroes)
        self._item_index = _casefold_index(self.items)

    def find_hero(self, name: str) -> Optional[Entity]:
        """Return the hero whose name matches ignoring case."""
        return self._lookup(self._hero_index, self.heroes, name)

    def find_item(self, name: str) -> Optional[Entity]:
        """Return the item whose name matches ignoring case."""
        return self._lookup(self._item_index, self.items, name)

    @staticmethod
    def _lookup(index: Dict[str, str], table: Mapping[str, int], name: str) -> Optional[Entity]:
        display = index.get(name.strip().lower())
        if display is None:
            return None
        return Entity(id=table[display], name=display)

    @classmethod
    def from_catalog(cls, heroes: Iterable[dict], items: Iterable[dict]) -> "EntityRegistry":
        """Build a registry from raw catalog records.

        Items are de-duplicated by (name, type) and dropped when they carry no
        image at all. Abilities are the ability-typed items with both a name
        and an image.

        Args:
            heroes: Hero records with at least ``id`` and ``name``.
            items: Item records with ``id``, ``name``, ``type`` and image fields.

        Returns:
            A populated EntityRegistry.
        """
        hero_table: Dict[str, int] = {}
        for record in heroes:
            entity = _parse_entity(record, "hero")
            if entity and entity.name not in hero_table:
                hero_table[entity.name] = entity.id

        item_table: Dict[str, int] = {}
        abilities: List[Ability] = []
        seen_name_types = set()
        skipped_no_image = 0

        for record in items:
            entity = _parse_entity(record, "item")
            if entity is None:
                continue

            item_type = record.get("type")
            key = (entity.name, item_type)
            if key in seen_name_types:
                continue
            seen_name_types.add(key)

            if not _any_item_image(record):
                skipped_no_image += 1
                continue

            item_table.setdefault(entity.name, entity.id)

            if item_type == ABILITY_ITEM_TYPE:
                image = record.get("image_webp") or record.get("image")
                if image:
                    abilities.append(Ability(name=entity.name, image=image))

        if skipped_no_image:
            logger.debug(f"Skipped {skipped_no_image} catalog items without images")

        logger.info(
            f"Loaded catalog: {len(hero_table)} heroes, {len(item_table)} items, "
            f"{len(abilities)} abilities"
        )
        return cls(heroes=hero_table, items=item_table, abilities=abilities)


def load_catalog(path: str) -> EntityRegistry:
    """Read a catalog JSON file of the form ``{"heroes": [...], "items": [...]}``.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not a JSON object.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Catalog {path} must contain a JSON object")
    return EntityRegistry.from_catalog(data.get("heroes") or [], data.get("items") or [])


def resolve_entity_ids(names: Iterable[str], entities: Mapping[str, int]) -> List[int]:
    """Map names to catalog ids ignoring case, skipping unknown names."""
    index = _casefold_index(entities)
    ids = []
    for name in names:
        display = index.get(name.strip().lower())
        if display is not None:
            ids.append(entities[display])
    return ids


def _casefold_index(table: Mapping[str, int]) -> Dict[str, str]:
    index: Dict[str, str] = {}
    for name in table:
        index.setdefault(name.lower(), name)
    return index


def _parse_entity(record: dict, kind: str) -> Optional[Entity]:
    try:
        name = str(record["name"]).strip()
        entity_id = int(record["id"])
    except (KeyError, TypeError, ValueError) as e:
        logger.warning(f"Skipping malformed {kind} catalog entry: {e!r}")
        return None
    if not name:
        logger.warning(f"Skipping {kind} catalog entry {entity_id} with empty name")
        return None
    return Entity(id=entity_id, name=name)


def _any_item_image(record: dict) -> bool:
    return any(
        record.get(key)
        for key in ("shop_image", "shop_image_webp", "image", "image_webp")
    )
