"""
Score text parsing and pool-play score rules.

Pool games are one game to 21 or more, win by 2, no point cap. Scores are
entered as text like ``21-18`` or ``23–21`` (en-dash).
"""
import re
from typing import Optional, Tuple

SCORE_PATTERN = re.compile(r'^(\d+)\s*[-–]\s*(\d+)$')
POOL_TARGET = 21
POOL_WIN_BY = 2


def parse_score(text: Optional[str]) -> Optional[Tuple[int, int]]:
    """Parse "A-B" into (a, b). Returns None for anything unparseable."""
    if not text:
        return None
    match = SCORE_PATTERN.match(str(text).strip())
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def is_valid_pool_score(a: int, b: int) -> bool:
    return max(a, b) >= POOL_TARGET and abs(a - b) >= POOL_WIN_BY


def pool_score_status(text: Optional[str]) -> str:
    """
    Classify a pool score for display.

    Returns 'empty' when nothing was entered, 'invalid' when the text does not
    parse or breaks pool rules, 'valid' otherwise.
    """
    if not text or not str(text).strip():
        return 'empty'
    parsed = parse_score(text)
    if parsed is None or not is_valid_pool_score(*parsed):
        return 'invalid'
    return 'valid'


def winning_side(text: Optional[str]) -> Optional[str]:
    """Return 'team1' or 'team2' for a parseable, decisive score, else None."""
    parsed = parse_score(text)
    if parsed is None:
        return None
    a, b = parsed
    if a > b:
        return 'team1'
    if b > a:
        return 'team2'
    return None
