"""
Playoff team formation and the Upper / Lower brackets.

Teams are drawn from pool standings: guys keep their pool order while girls
are optionally shuffled inside small windows, so the top guy is not always
paired with the top girl but seeding bands still hold. Teams are then
re-seeded by the combined pool record of both partners.
"""
import logging
import math
from typing import Dict, List, Optional

from blinddraw.elimination import LOWER_COURTS, UPPER_COURTS, build_bracket
from blinddraw.models import LOWER, UPPER, BracketMatch, PlayoffTeam
from blinddraw.roster import slug
from blinddraw.shuffle import shuffle

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SIZE = 4


def default_upper_size(standings: Dict[str, List[Dict]]) -> int:
    """Half the guys roster, rounded up, at least 1."""
    return math.ceil(max(1, len(standings['guys'])) / 2)


def _combined_record(team: PlayoffTeam, records: Dict[str, Dict]):
    wins = 0
    point_diff = 0
    for member in team.members:
        record = records.get(slug(member))
        if record:
            wins += record['wins']
            point_diff += record['point_diff']
    return wins, point_diff


def seed_playoff_teams(teams: List[PlayoffTeam], standings: Dict[str, List[Dict]]) -> List[PlayoffTeam]:
    """
    Rank teams by combined partner record and reassign seeds 1..N.

    Ranking: sum of wins (desc) -> sum of point diff (desc) -> team name.
    """
    records = {slug(r['name']): r for r in standings['guys'] + standings['girls']}

    def sort_key(team):
        wins, point_diff = _combined_record(team, records)
        return -wins, -point_diff, team.name.casefold(), team.name

    ranked = sorted(teams, key=sort_key)
    for rank, team in enumerate(ranked):
        team.seed = rank + 1
        team.id = f"{team.division}-{team.seed}-{slug(team.name)}"
    return ranked


def build_playoff_teams(standings: Dict[str, List[Dict]], division: str, upper_size: int,
                        window_size: int = DEFAULT_WINDOW_SIZE, randomize: bool = True,
                        seed: Optional[int] = None) -> List[PlayoffTeam]:
    """
    Pair ranked guys and girls into seeded playoff teams for one division.

    Args:
        standings: {'guys': [...], 'girls': [...]} as returned by compute_standings
        division: UPPER takes ranks [0, upper_size), LOWER the rest
        upper_size: players per gender advancing to the Upper division
        window_size: number of girls shuffled together before pairing
        randomize: shuffle the girls inside each window
        seed: makes the window shuffles reproducible

    Returns:
        Teams ordered and seeded by combined partner record.
    """
    if window_size < 2:
        raise ValueError(f"window_size must be at least 2, got {window_size}")
    if upper_size < 0:
        raise ValueError(f"upper_size must not be negative, got {upper_size}")
    if division not in (UPPER, LOWER):
        raise ValueError(f"Playoff teams are built for {UPPER} or {LOWER}, got {division!r}")

    if division == UPPER:
        guys = standings['guys'][:upper_size]
        girls = standings['girls'][:upper_size]
    else:
        guys = standings['guys'][upper_size:]
        girls = standings['girls'][upper_size:]

    teams = []
    count = min(len(guys), len(girls))
    for start in range(0, count, window_size):
        end = min(start + window_size, count)
        window = girls[start:end]
        if randomize:
            window = shuffle(window, None if seed is None else seed + start)
        for offset, guy in enumerate(guys[start:end]):
            girl = window[offset]
            name = f"{guy['name']} & {girl['name']}"
            teams.append(PlayoffTeam(
                id=f"{division}-tmp-{start + offset + 1}-{slug(name)}",
                name=name,
                members=[guy['name'], girl['name']],
                seed=start + offset + 1,
                division=division,
            ))

    unpaired = len(guys) + len(girls) - 2 * count
    if unpaired:
        logger.warning(f"{division}: {unpaired} player(s) left without a playoff partner")

    return seed_playoff_teams(teams, standings)


def build_playoff_brackets(standings: Dict[str, List[Dict]], upper_size: Optional[int] = None,
                           window_size: int = DEFAULT_WINDOW_SIZE, randomize: bool = True,
                           byes_upper: int = 0, byes_lower: int = 0, seed: Optional[int] = None,
                           upper_courts: Optional[List[int]] = None,
                           lower_courts: Optional[List[int]] = None) -> List[BracketMatch]:
    """Build the Upper and Lower brackets from pool standings. Upper matches come first."""
    if upper_size is None:
        upper_size = default_upper_size(standings)

    upper_teams = build_playoff_teams(standings, UPPER, upper_size, window_size, randomize, seed)
    lower_teams = build_playoff_teams(standings, LOWER, upper_size, window_size, randomize,
                                      None if seed is None else seed + upper_size)

    upper = build_bracket(UPPER, upper_teams, byes_upper, upper_courts or UPPER_COURTS)
    lower = build_bracket(LOWER, lower_teams, byes_lower, lower_courts or LOWER_COURTS)
    return upper + lower
