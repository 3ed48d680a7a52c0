"""
Redemption Rally: a secondary bracket for early playoff losers.
"""
import logging
from typing import List, Optional

from blinddraw.elimination import LOWER_COURTS, build_bracket
from blinddraw.models import LOWER, REDEMPTION, UPPER, BracketMatch, PlayoffTeam
from blinddraw.roster import slug, unique_names
from blinddraw.scoring import winning_side
from blinddraw.shuffle import shuffle

logger = logging.getLogger(__name__)

FEEDER_ROUNDS = (1, 2)


def collect_early_losers(main_brackets: List[BracketMatch]) -> List[PlayoffTeam]:
    """Losing teams of decided round 1 and 2 Upper / Lower matches, in bracket order."""
    losers = []
    for match in main_brackets:
        if match.division not in (UPPER, LOWER) or match.round not in FEEDER_ROUNDS:
            continue
        if not match.has_both_teams():
            continue
        side = winning_side(match.score)
        if side is None:
            continue
        losers.append(match.team_on('team2' if side == 'team1' else 'team1'))
    return losers


def _redemption_team(members: List[str], seed: int) -> PlayoffTeam:
    name = f"{members[0]} & {members[1]}"
    return PlayoffTeam(
        id=f"{REDEMPTION}-{seed}-{slug(name)}",
        name=name,
        members=list(members),
        seed=seed,
        division=REDEMPTION,
    )


def build_redemption_teams(losers: List[PlayoffTeam], randomize_partners: bool = False,
                           seed: Optional[int] = None) -> List[PlayoffTeam]:
    """
    Turn collected losing teams into seeded Redemption Rally teams.

    With `randomize_partners` every member is pooled regardless of gender,
    shuffled and re-paired in order; an odd last player sits out.
    Otherwise the losing pairs stay together. Seeds follow collection order.
    """
    if not randomize_partners:
        return [_redemption_team(team.members, i + 1) for i, team in enumerate(losers)]

    players = shuffle(unique_names(name for team in losers for name in team.members), seed)
    if len(players) % 2:
        logger.warning(f"Redemption Rally: odd player count, {players[-1]} sits out")
    return [_redemption_team(players[i:i + 2], i // 2 + 1) for i in range(0, len(players) - 1, 2)]


def build_redemption_rally(main_brackets: List[BracketMatch], randomize_partners: bool = False,
                           seed: Optional[int] = None,
                           courts: Optional[List[int]] = None) -> List[BracketMatch]:
    """Build the Redemption Rally bracket from early losers of the Upper and Lower brackets."""
    losers = collect_early_losers(main_brackets)
    teams = build_redemption_teams(losers, randomize_partners, seed)
    logger.info(f"Redemption Rally: {len(losers)} losing team(s) -> {len(teams)} team(s)")
    return build_bracket(REDEMPTION, teams, 0, courts or LOWER_COURTS)
