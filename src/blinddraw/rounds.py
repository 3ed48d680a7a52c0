"""
Pool round generation.

Each round draws mixed guy/girl teams from freshly shuffled rosters and puts
them on courts two teams at a time. In strict mode the generator prefers
partners who have not played together before and opponents who have not met,
falling back to repeats when no alternative exists.

Partner and opponent history is carried as explicit maps of
slug -> frozenset(slug). Every step that commits a pairing returns an updated
copy of the map it was given.
"""
import logging
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from blinddraw.models import POWER_PUFF, ULTIMATE_REVCO, PoolMatch
from blinddraw.roster import slug, unique_names
from blinddraw.scoring import parse_score
from blinddraw.shuffle import shuffle

logger = logging.getLogger(__name__)

GIRLS_SEED_OFFSET = 17

HistoryMap = Dict[str, FrozenSet[str]]
DrawnTeam = Tuple[Tuple[str, str], Optional[str]]


def _link(history_map: HistoryMap, a: str, b: str) -> HistoryMap:
    """Return a copy of `history_map` with a and b recorded against each other."""
    a, b = slug(a), slug(b)
    if not a or not b:
        return history_map
    updated = dict(history_map)
    updated[a] = updated.get(a, frozenset()) | {b}
    updated[b] = updated.get(b, frozenset()) | {a}
    return updated


def _with_partner(partner_map: HistoryMap, a: str, b: str) -> HistoryMap:
    return _link(partner_map, a, b)


def _with_opponents(opponent_map: HistoryMap, team_a: Sequence[str], team_b: Sequence[str]) -> HistoryMap:
    for a in team_a:
        for b in team_b:
            opponent_map = _link(opponent_map, a, b)
    return opponent_map


def _linked(history_map: HistoryMap, a: str, b: str) -> bool:
    return slug(b) in history_map.get(slug(a), frozenset())


def build_partner_map(history: List[PoolMatch]) -> HistoryMap:
    partner_map = {}
    for match in history:
        partner_map = _with_partner(partner_map, *match.team_a)
        partner_map = _with_partner(partner_map, *match.team_b)
    return partner_map


def build_opponent_map(history: List[PoolMatch]) -> HistoryMap:
    opponent_map = {}
    for match in history:
        opponent_map = _with_opponents(opponent_map, match.team_a, match.team_b)
    return opponent_map


def _pair_mixed(guys: List[str], girls: List[str], partner_map: HistoryMap,
                strict: bool) -> Tuple[List[DrawnTeam], List[str], HistoryMap]:
    """
    Pair guys[i] with girls[i]. In strict mode a repeat partnership is replaced
    by swapping in the first later girl (within the paired range) that the guy
    has not partnered yet.

    Returns (teams, girls in their final order, updated partner map).
    """
    girls = list(girls)
    teams = []
    count = min(len(guys), len(girls))
    for i in range(count):
        guy = guys[i]
        if strict and _linked(partner_map, guy, girls[i]):
            for j in range(i + 1, count):
                if not _linked(partner_map, guy, girls[j]):
                    logger.debug(f"Swapping {girls[j]} in for {girls[i]} to avoid a repeat with {guy}")
                    girls[i], girls[j] = girls[j], girls[i]
                    break
            else:
                logger.debug(f"No fresh partner left for {guy}; repeating with {girls[i]}")
        teams.append(((guy, girls[i]), None))
        partner_map = _with_partner(partner_map, guy, girls[i])
    return teams, girls, partner_map


def _pair_leftovers(extra_guys: List[str], extra_girls: List[str]) -> Tuple[List[DrawnTeam], List[str]]:
    """Form at most one same-gender team per gender. Returns (teams, unplaced names)."""
    teams = []
    standby = []
    for extras, tag in ((extra_guys, ULTIMATE_REVCO), (extra_girls, POWER_PUFF)):
        if len(extras) >= 2:
            teams.append(((extras[0], extras[1]), tag))
            standby.extend(extras[2:])
        else:
            standby.extend(extras)
    return teams, standby


def _assign_courts(teams: List[DrawnTeam], opponent_map: HistoryMap, strict: bool,
                   round_number: int, start_court: int) -> Tuple[List[PoolMatch], List[DrawnTeam], HistoryMap]:
    """
    Put teams on courts two at a time.

    The first remaining team meets the first later team none of whose members
    it has faced (strict mode), otherwise simply the next team. Returns
    (matches, unplaced teams, updated opponent map).
    """
    remaining = list(teams)
    matches = []
    court = start_court
    while len(remaining) >= 2:
        (members_a, tag_a) = remaining.pop(0)
        index = 0
        if strict:
            for i, (members_b, _) in enumerate(remaining):
                if not any(_linked(opponent_map, a, b) for a in members_a for b in members_b):
                    index = i
                    break
        (members_b, tag_b) = remaining.pop(index)
        opponent_map = _with_opponents(opponent_map, members_a, members_b)
        matches.append(PoolMatch(
            round=round_number,
            court=court,
            team_a=members_a,
            team_b=members_b,
            tag=tag_a or tag_b,
        ))
        court += 1
    return matches, remaining, opponent_map


def build_round(round_number: int, guys: List[str], girls: List[str], history: List[PoolMatch],
                strict: bool = True, seed: Optional[int] = None,
                start_court: int = 1) -> Tuple[List[PoolMatch], List[str]]:
    """
    Build a single pool round.

    Returns (matches, standby) where standby lists players that could not be
    placed in this round.
    """
    shuffled_guys = shuffle(guys, seed)
    shuffled_girls = shuffle(girls, None if seed is None else seed + GIRLS_SEED_OFFSET)

    partner_map = build_partner_map(history)
    opponent_map = build_opponent_map(history)

    teams, shuffled_girls, partner_map = _pair_mixed(shuffled_guys, shuffled_girls, partner_map, strict)
    paired = len(teams)
    extra_teams, standby = _pair_leftovers(shuffled_guys[paired:], shuffled_girls[paired:])
    teams.extend(extra_teams)

    matches, unplaced, opponent_map = _assign_courts(teams, opponent_map, strict, round_number, start_court)
    for members, _ in unplaced:
        standby.extend(members)

    if standby:
        logger.warning(f"Round {round_number}: no spot for {', '.join(standby)}")
    return matches, standby


def generate_round_batch(guys: List[str], girls: List[str], history: List[PoolMatch],
                         strict: bool = True, seed: Optional[int] = None,
                         round_count: int = 1, start_court: int = 1) -> Dict:
    """
    Generate `round_count` consecutive rounds.

    Each round sees the rounds generated before it in the same batch as
    history. Round numbers continue after the highest round in `history`.

    Returns {'matches': [PoolMatch, ...], 'standby': {round_number: [names]}}.
    """
    if round_count < 1:
        raise ValueError(f"round_count must be at least 1, got {round_count}")
    if start_court < 1:
        raise ValueError(f"start_court must be at least 1, got {start_court}")

    guys = unique_names(guys)
    girls = unique_names(girls)
    history = list(history)
    last_round = max((m.round for m in history), default=0)

    generated = []
    standby = {}
    for offset in range(1, round_count + 1):
        round_number = last_round + offset
        matches, waiting = build_round(round_number, guys, girls, history,
                                       strict=strict, seed=seed, start_court=start_court)
        generated.extend(matches)
        history.extend(matches)
        if waiting:
            standby[round_number] = waiting

    logger.info(f"Generated {round_count} round(s), {len(generated)} matches "
                f"from {len(guys)} guys and {len(girls)} girls (strict={strict})")
    return {'matches': generated, 'standby': standby}


def generate_rounds(guys: List[str], girls: List[str], history: List[PoolMatch],
                    strict: bool = True, seed: Optional[int] = None,
                    round_count: int = 1, start_court: int = 1) -> List[PoolMatch]:
    """Generate new pool rounds. See generate_round_batch for details."""
    return generate_round_batch(guys, girls, history, strict=strict, seed=seed,
                                round_count=round_count, start_court=start_court)['matches']


def rounds_in(matches: List[PoolMatch]) -> List[int]:
    return sorted({m.round for m in matches})


def delete_round(matches: List[PoolMatch], round_number: int) -> List[PoolMatch]:
    """Return the match list without any match of `round_number`."""
    return [m.copy() for m in matches if m.round != round_number]


def record_pool_score(matches: List[PoolMatch], match_id: str, score_text: str) -> List[PoolMatch]:
    """Return a copy of `matches` with the score text of `match_id` replaced."""
    updated = [m.copy() for m in matches]
    for match in updated:
        if match.id == match_id:
            match.score_text = (score_text or '').strip()
            if match.score_text and parse_score(match.score_text) is None:
                logger.debug(f"Unparseable score {score_text!r} stored for {match_id}")
            return updated
    raise ValueError(f"No pool match with id {match_id!r}")
