"""Split hero notes that name one of the hero's abilities into ability groups."""

import logging
import re
from typing import Dict, Iterable, List, Optional, Pattern, Tuple

from patchlog.constants import ABILITY_MATCH_POLICIES, DEFAULT_ABILITY_MATCH_POLICY
from patchlog.models import AbilityChange, ChangelogContent, Note, ScalingPattern
from patchlog.registry import Ability

logger = logging.getLogger("patchlog")


def _ability_prefix(name: str) -> Pattern:
    # Name as a whole word, then ":" or a spaced dash; "-10%" keeps its sign
    return re.compile(rf'^{re.escape(name)}\b\s*(?::\s*|[-–]\s+)?', re.IGNORECASE)


def _order_abilities(abilities: Iterable[Ability], policy: str) -> List[Ability]:
    usable = [a for a in abilities if a.name and a.image]
    if policy == 'longest_prefix':
        # Stable sort keeps catalog order between equal-length names
        return sorted(usable, key=lambda a: len(a.name), reverse=True)
    return usable


def match_ability(note: Note, matchers: List[Tuple[Ability, Pattern]]) -> Optional[Tuple[Ability, Note]]:
    """Find the first ability named at the start of a note.

    Args:
        note: A hero note.
        matchers: Abilities with their compiled prefix patterns, in match order.

    Returns:
        The ability and the note rewritten without the ability name, or None.
    """
    for ability, pattern in matchers:
        match = pattern.match(note.text)
        if not match:
            continue

        offset = match.end()
        remaining = note.text[offset:]
        stripped = remaining.strip()
        offset += len(remaining) - len(remaining.lstrip())
        if stripped and len(stripped[0].upper()) == 1:
            # Length must not change or pattern offsets drift ("ß" -> "SS")
            stripped = stripped[0].upper() + stripped[1:]

        patterns = [
            ScalingPattern(text=p.text, start=p.start - offset, end=p.end - offset)
            for p in note.patterns
            if p.start >= offset and p.end - offset <= len(stripped)
        ]
        return ability, Note(text=stripped, patterns=patterns)

    return None


def refine(
    content: ChangelogContent,
    abilities: Iterable[Ability],
    policy: str = DEFAULT_ABILITY_MATCH_POLICY,
) -> ChangelogContent:
    """Move hero notes that start with an ability name into ability groups.

    Abilities are tried in catalog order and the first match wins. With the
    ``longest_prefix`` policy, longer names are tried first instead. Groups
    already on a hero are kept and extended, so running this twice changes
    nothing.

    Args:
        content: Classified changelog content; updated in place.
        abilities: Ability-typed catalog entries.
        policy: One of ``registry_order`` or ``longest_prefix``.

    Returns:
        The same content object.

    Raises:
        ValueError: If policy is unknown.
    """
    if policy not in ABILITY_MATCH_POLICIES:
        raise ValueError(f"Unknown ability match policy: {policy!r}")

    matchers = [(a, _ability_prefix(a.name)) for a in _order_abilities(abilities, policy)]
    if not matchers:
        return content

    moved = 0
    for hero_name, hero in content.heroes.items():
        groups: Dict[str, AbilityChange] = {a.ability_name: a for a in hero.abilities}
        order: List[str] = [a.ability_name for a in hero.abilities]
        remaining: List[Note] = []

        for note in hero.notes:
            found = match_ability(note, matchers)
            if found is None:
                remaining.append(note)
                continue

            ability, rewritten = found
            group = groups.get(ability.name)
            if group is None:
                group = groups[ability.name] = AbilityChange(
                    ability_name=ability.name,
                    ability_image=ability.image,
                )
                order.append(ability.name)
            group.notes.append(rewritten)
            moved += 1

        hero.notes = remaining
        hero.abilities = [groups[name] for name in order]

    if moved:
        logger.debug(f"Moved {moved} hero notes into ability groups")
    return content
