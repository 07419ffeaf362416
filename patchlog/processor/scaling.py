"""Detection of numeric scaling spans in patch-note text."""

import re
from typing import List

from patchlog.models import Note, ScalingPattern

# Per-level values such as "7/9/13/20" or "1.5/2/2.5"
SEQUENCE_PATTERN = re.compile(r'\d+(?:\.\d+)?(?:/\d+(?:\.\d+)?)+')

# Value changes such as "10 → 15", "10% -> 15%" or "80 to 90"
CHANGE_PATTERN = re.compile(
    r'\d+(?:\.\d+)?%?\s*(?:→|->|to)\s*\d+(?:\.\d+)?%?',
    re.IGNORECASE,
)


def extract_patterns(text: str) -> Note:
    """Wrap text in a Note annotated with its scaling patterns.

    Sequences are found first; a value-change phrase that intersects a
    sequence is dropped. The result is sorted by start offset.

    Args:
        text: Note text.

    Returns:
        Note with non-overlapping patterns in ascending order.
    """
    patterns: List[ScalingPattern] = [
        ScalingPattern(text=m.group(0), start=m.start(), end=m.end())
        for m in SEQUENCE_PATTERN.finditer(text)
    ]
    sequences = list(patterns)

    for match in CHANGE_PATTERN.finditer(text):
        start, end = match.start(), match.end()
        if any(start < seq.end and end > seq.start for seq in sequences):
            continue
        patterns.append(ScalingPattern(text=match.group(0), start=start, end=end))

    patterns.sort(key=lambda p: p.start)
    return Note(text=text, patterns=patterns)
