"""
Roster text handling and player classification.
"""
import re
from enum import Enum
from typing import Dict, Iterable, List


class Gender(Enum):
    GUY = 'guy'
    GIRL = 'girl'
    UNKNOWN = 'unknown'


def slug(name: str) -> str:
    """Comparison key for a player name: trimmed, lowercased, single spaces."""
    return re.sub(r'\s+', ' ', (name or '').strip().lower())


def unique_names(names: Iterable[str]) -> List[str]:
    """Drop blanks and slug duplicates, keeping the first spelling."""
    seen = set()
    result = []
    for name in names:
        name = (name or '').strip()
        key = slug(name)
        if not key or key in seen:
            continue
        seen.add(key)
        result.append(name)
    return result


def parse_roster(text: str) -> List[str]:
    """Parse newline-delimited roster text into unique display names."""
    return unique_names((text or '').splitlines())


def roster_membership(guys: Iterable[str], girls: Iterable[str]) -> Dict[str, Gender]:
    """Map each rostered slug to its gender. A name on both rosters counts as a guy."""
    membership = {slug(name): Gender.GIRL for name in girls if slug(name)}
    membership.update({slug(name): Gender.GUY for name in guys if slug(name)})
    return membership


def classify_player(name: str, membership: Dict[str, Gender]) -> Gender:
    return membership.get(slug(name), Gender.UNKNOWN)
