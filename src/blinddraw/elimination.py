"""
Single elimination bracket generation and management.

A bracket is a flat list of BracketMatch objects indexed by id. Round 1
matches are the leaves; every match except the final points forward to the
parent match (and side) its winner feeds. Nothing points backward.
"""
import logging
import math
from typing import Dict, List, Optional

from blinddraw.models import BYE, LOWER, REDEMPTION, UPPER, BracketMatch, PlayoffTeam
from blinddraw.scoring import winning_side

logger = logging.getLogger(__name__)

UPPER_COURTS = [1, 2, 3, 4, 5]
LOWER_COURTS = [6, 7, 8, 9, 10]
MAX_BYES = 5

DEFAULT_COURTS = {
    UPPER: UPPER_COURTS,
    LOWER: LOWER_COURTS,
    REDEMPTION: LOWER_COURTS,
}


def get_round_name(round_number: int, total_rounds: int) -> str:
    """Get the name of a round based on how many teams it starts with."""
    teams_in_round = 2 ** (total_rounds - round_number + 1)
    if teams_in_round == 2:
        return "Final"
    elif teams_in_round == 4:
        return "Semifinal"
    elif teams_in_round == 8:
        return "Quarterfinal"
    else:
        return f"Round of {teams_in_round}"


def calculate_bracket_size(num_teams: int) -> int:
    """Calculate the bracket size (next power of 2)."""
    if num_teams <= 0:
        return 0
    return 2 ** math.ceil(math.log2(num_teams))


def calculate_byes(num_teams: int) -> int:
    """Calculate number of byes the bracket size forces."""
    bracket_size = calculate_bracket_size(num_teams)
    return bracket_size - num_teams


def calculate_effective_byes(num_teams: int, requested_byes: int = 0) -> int:
    """
    Number of top seeds that skip round 1.

    At least the structural byes, at least the requested count, never more
    than MAX_BYES or the bracket size.
    """
    bracket_size = calculate_bracket_size(num_teams)
    return min(max(calculate_byes(num_teams), requested_byes), MAX_BYES, bracket_size)


def _generate_bracket_order(bracket_size: int) -> List[int]:
    """
    Generate the standard tournament bracket order.
    This ensures that if all higher seeds win, they meet in the proper rounds.

    For 8 teams: [1, 8, 4, 5, 2, 7, 3, 6]
    This gives matchups: 1v8, 4v5, 2v7, 3v6
    Winners: 1v4 side, 2v3 side
    Final: 1v2 (if chalk)
    """
    if bracket_size <= 1:
        return [1]
    if bracket_size == 2:
        return [1, 2]

    half_size = bracket_size // 2
    upper_half = _generate_bracket_order(half_size)

    # Pair each seed with its complement
    result = []
    for seed in upper_half:
        result.extend([seed, bracket_size + 1 - seed])

    return result


def court_for(courts: List[int], slot: int) -> int:
    return courts[(slot - 1) % len(courts)]


def build_bracket(division: str, teams: List[PlayoffTeam], requested_byes: int = 0,
                  courts: Optional[List[int]] = None) -> List[BracketMatch]:
    """
    Seed `teams` into a single elimination bracket.

    Teams are placed into round 1 by seed following the standard bracket
    order. The top seeds (see calculate_effective_byes) that end up without a
    round 1 opponent go straight into their round 2 slot; their round 1 match
    is kept as a 'BYE' placeholder without teams.

    Returns all matches, round by round, each round ordered by slot.
    """
    if requested_byes < 0:
        raise ValueError(f"requested_byes must not be negative, got {requested_byes}")
    if courts is None:
        courts = DEFAULT_COURTS.get(division, LOWER_COURTS)
    if not courts:
        raise ValueError("At least one court is required")

    num_teams = len(teams)
    if num_teams == 0:
        return []

    bracket_size = calculate_bracket_size(num_teams)
    bracket_order = _generate_bracket_order(bracket_size)
    index_by_seed = {seed: i for i, seed in enumerate(bracket_order)}

    slots = [None] * bracket_size
    for team in sorted(teams, key=lambda t: t.seed):
        index = index_by_seed.get(team.seed)
        if index is not None:
            slots[index] = team

    bye_seeds = set(range(1, calculate_effective_byes(num_teams, requested_byes) + 1))

    round_number = 1
    current = []
    for i in range(0, bracket_size, 2):
        slot = i // 2 + 1
        current.append(BracketMatch(
            id=f"{division}-R{round_number}-{slot}",
            division=division,
            round=round_number,
            slot=slot,
            team1=slots[i],
            team2=slots[i + 1] if i + 1 < bracket_size else None,
            court=court_for(courts, slot),
        ))
    matches = list(current)

    while len(current) > 1:
        round_number += 1
        next_round = []
        for i in range(0, len(current), 2):
            slot = i // 2 + 1
            parent = BracketMatch(
                id=f"{division}-R{round_number}-{slot}",
                division=division,
                round=round_number,
                slot=slot,
                court=court_for(courts, slot),
            )
            current[i].next_id, current[i].next_side = parent.id, 'team1'
            current[i + 1].next_id, current[i + 1].next_side = parent.id, 'team2'
            next_round.append(parent)
        matches.extend(next_round)
        current = next_round

    by_id = {m.id: m for m in matches}
    for match in matches:
        if match.round != 1 or not match.next_id:
            continue
        present = [t for t in (match.team1, match.team2) if t is not None]
        if len(present) == 1 and present[0].seed in bye_seeds:
            by_id[match.next_id].set_team(match.next_side, present[0])
            match.score = BYE
            match.team1 = None
            match.team2 = None

    logger.info(f"Built {division} bracket: {num_teams} teams, size {bracket_size}, "
                f"{len(bye_seeds)} bye seed(s)")
    return matches


def _index(matches: List[BracketMatch]) -> Dict[str, BracketMatch]:
    return {m.id: m for m in matches}


def record_bracket_score(matches: List[BracketMatch], match_id: str, score_text: str) -> List[BracketMatch]:
    """
    Record a bracket score and advance the winner.

    Returns a new match list. When both teams are present and the score is a
    parseable, decisive "A-B" (higher wins), the winner is written into the
    parent slot and, if the match has a loser destination, the loser into that
    slot.
    """
    updated = [m.copy() for m in matches]
    by_id = _index(updated)
    match = by_id.get(match_id)
    if match is None:
        raise ValueError(f"No bracket match with id {match_id!r}")
    if match.is_bye:
        raise ValueError(f"{match_id} is a bye and cannot be scored")
    score_text = (score_text or '').strip()
    if score_text.upper() == BYE:
        raise ValueError(f"{BYE!r} is reserved for bye placeholders and cannot be entered as a score")

    match.score = score_text
    side = winning_side(match.score)
    if side is None or not match.has_both_teams():
        return updated

    winner = match.team_on(side)
    loser = match.team_on('team2' if side == 'team1' else 'team1')
    if match.next_id and match.next_id in by_id:
        by_id[match.next_id].set_team(match.next_side, winner)
    if match.loser_next_id and match.loser_next_id in by_id:
        by_id[match.loser_next_id].set_team(match.loser_next_side, loser)
    logger.info(f"{match_id}: {winner.name} beat {loser.name} {match.score}")
    return updated


def advance_walkover(matches: List[BracketMatch], match_id: str) -> List[BracketMatch]:
    """
    Advance the lone team of a round 1 match that has no opponent.

    Only needed when the structural byes exceed MAX_BYES, leaving seeds below
    the bye cut without an opponent.
    """
    updated = [m.copy() for m in matches]
    by_id = _index(updated)
    match = by_id.get(match_id)
    if match is None:
        raise ValueError(f"No bracket match with id {match_id!r}")
    present = [t for t in (match.team1, match.team2) if t is not None]
    if match.round != 1 or len(present) != 1 or not match.next_id:
        raise ValueError(f"{match_id} is not a round 1 match with a single team")

    by_id[match.next_id].set_team(match.next_side, present[0])
    match.score = BYE
    match.team1 = None
    match.team2 = None
    return updated


def bracket_columns(matches: List[BracketMatch], division: str) -> List[List[BracketMatch]]:
    """Matches of one division grouped by round and ordered by slot, without bye placeholders."""
    division_matches = [m for m in matches if m.division == division]
    if not division_matches:
        return []
    total_rounds = max(m.round for m in division_matches)
    columns = []
    for round_number in range(1, total_rounds + 1):
        column = sorted((m for m in division_matches if m.round == round_number and not m.is_bye),
                        key=lambda m: m.slot)
        columns.append(column)
    return columns


def describe_slot(matches: List[BracketMatch], match_id: str, side: str) -> str:
    """Describe where an empty slot will be filled from, e.g. 'Winner R1-M2'."""
    for child in matches:
        if child.next_id == match_id and child.next_side == side:
            return f"Winner R{child.round}-M{child.slot}"
    return "TBD"


def get_champion(matches: List[BracketMatch], division: str) -> Optional[PlayoffTeam]:
    """Winner of the division's final. A division of one team is won by that team."""
    division_matches = [m for m in matches if m.division == division]
    if not division_matches:
        return None
    final = max(division_matches, key=lambda m: m.round)
    if len(division_matches) == 1:
        present = [t for t in (final.team1, final.team2) if t is not None]
        if len(present) == 1:
            return present[0]
    side = winning_side(final.score)
    if side is None or not final.has_both_teams():
        return None
    return final.team_on(side)
