"""Filter criteria built from request parameters."""

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional

from patchlog.registry import EntityRegistry


def parse_csv(value: Optional[str]) -> List[str]:
    """Split a comma-separated parameter, dropping empty entries."""
    if not value:
        return []
    return [part.strip() for part in value.split(',') if part.strip()]


@dataclass(frozen=True)
class FilterCriteria:
    """Selected heroes, selected items and a free-text query.

    Every field is optional; a criteria with nothing set filters nothing.
    """

    selected_hero_names: FrozenSet[str] = field(default_factory=frozenset)
    selected_item_names: FrozenSet[str] = field(default_factory=frozenset)
    search_query: str = ""

    def __post_init__(self):
        # Accept any iterable of names
        object.__setattr__(self, "selected_hero_names", frozenset(self.selected_hero_names or ()))
        object.__setattr__(self, "selected_item_names", frozenset(self.selected_item_names or ()))
        object.__setattr__(self, "search_query", self.search_query or "")

    @property
    def query(self) -> str:
        """Lower-cased, trimmed query; empty when no search is active."""
        return self.search_query.strip().lower()

    @property
    def has_hero_filter(self) -> bool:
        return bool(self.selected_hero_names)

    @property
    def has_item_filter(self) -> bool:
        return bool(self.selected_item_names)

    @property
    def has_query(self) -> bool:
        return bool(self.query)

    @property
    def is_active(self) -> bool:
        return self.has_hero_filter or self.has_item_filter or self.has_query

    @classmethod
    def from_params(
        cls,
        hero: Optional[str] = None,
        item: Optional[str] = None,
        q: Optional[str] = None,
    ) -> "FilterCriteria":
        """Build criteria from raw ``hero``, ``item`` and ``q`` parameters."""
        return cls(
            selected_hero_names=frozenset(parse_csv(hero)),
            selected_item_names=frozenset(parse_csv(item)),
            search_query=q or "",
        )

    def canonicalized(self, registry: EntityRegistry) -> "FilterCriteria":
        """Rewrite selected names to the registry's display casing.

        Names the registry does not know are kept as given.
        """
        heroes = set()
        for name in self.selected_hero_names:
            hero = registry.find_hero(name)
            heroes.add(hero.name if hero else name)

        items = set()
        for name in self.selected_item_names:
            item = registry.find_item(name)
            items.add(item.name if item else name)

        return FilterCriteria(
            selected_hero_names=frozenset(heroes),
            selected_item_names=frozenset(items),
            search_query=self.search_query,
        )
