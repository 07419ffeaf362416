"""Canonical constants for patchlog."""

import re

# Catalog item type whose entries are hero abilities
ABILITY_ITEM_TYPE = 'ability'

ABILITY_MATCH_POLICIES = {
    'registry_order',   # First ability in catalog order wins
    'longest_prefix',   # Longest matching ability name wins
}

DEFAULT_ABILITY_MATCH_POLICY = 'registry_order'

# Leading list marker on a patch-note line: "- ", "• ", "* "
BULLET_PATTERN = re.compile(r'^\s*[-•*]\s+')

# Section headings such as "[General]" or "[ Heroes ]"
BRACKET_HEADING_PATTERN = re.compile(r'^\s*\[.*\]\s*$')

STARTS_WITH_ALNUM_PATTERN = re.compile(r'^\s*[a-zA-Z0-9]')
