"""
Per-player pool standings.
"""
import logging
import sys
from typing import Dict, List, Optional

from blinddraw.models import PoolMatch
from blinddraw.roster import Gender, classify_player, roster_membership, slug, unique_names
from blinddraw.scoring import is_valid_pool_score, parse_score

logger = logging.getLogger(__name__)

UNKNOWN_POLICIES = ('guys', 'girls', 'error')


class UnrosteredPlayerError(ValueError):
    """A scored match names a player who is on neither roster."""

    def __init__(self, names):
        self.names = sorted(names)
        super().__init__(f"Players not on either roster: {', '.join(self.names)}")


def _new_record(name: str) -> Dict:
    return {'name': name, 'wins': 0, 'losses': 0, 'point_diff': 0}


def _sort_key(record: Dict, tiebreaks: Dict[str, int]):
    return (
        -record['wins'],
        -record['point_diff'],
        tiebreaks.get(slug(record['name']), sys.maxsize),
        record['name'].casefold(),
        record['name'],
    )


def rank_records(records: List[Dict], tiebreaks: Optional[Dict[str, int]] = None) -> List[Dict]:
    """
    Order player records for seeding.

    Ranking: wins (desc) -> point diff (desc) -> manual tiebreak (asc) -> name.
    Players without a manual tiebreak value sort after those with one.
    """
    keyed = {slug(name): value for name, value in (tiebreaks or {}).items()}
    return sorted(records, key=lambda r: _sort_key(r, keyed))


def compute_standings(matches: List[PoolMatch], guys: List[str], girls: List[str],
                      tiebreaks: Optional[Dict[str, int]] = None,
                      unknown_policy: str = 'guys') -> Dict[str, List[Dict]]:
    """
    Fold the pool match log into ranked guys and girls standings.

    Returns: {'guys': [{'name', 'wins', 'losses', 'point_diff'}, ...], 'girls': [...]}

    Every rostered player appears, even without games. Only matches whose score
    parses and satisfies pool rules count. Names on neither roster are handled
    by `unknown_policy`: 'guys' or 'girls' tallies them into that bucket,
    'error' raises UnrosteredPlayerError.
    """
    if unknown_policy not in UNKNOWN_POLICIES:
        raise ValueError(f"unknown_policy must be one of {UNKNOWN_POLICIES}, got {unknown_policy!r}")

    guys = unique_names(guys)
    girls = unique_names(girls)
    membership = roster_membership(guys, girls)
    buckets = {Gender.GUY: {}, Gender.GIRL: {}}
    for name in guys + girls:
        key = slug(name)
        buckets[membership[key]].setdefault(key, _new_record(name))

    scored = []
    unknown = {}
    for match in matches:
        parsed = parse_score(match.score_text)
        if parsed is None or not is_valid_pool_score(*parsed):
            continue
        scored.append((match, parsed))
        for name in match.players():
            if slug(name) and classify_player(name, membership) is Gender.UNKNOWN:
                unknown.setdefault(slug(name), name)

    if unknown:
        if unknown_policy == 'error':
            raise UnrosteredPlayerError(unknown.values())
        fallback = Gender.GUY if unknown_policy == 'guys' else Gender.GIRL
        logger.warning(f"Tallying unrostered players into {unknown_policy}: {sorted(unknown.values())}")
        for key, name in unknown.items():
            buckets[fallback][key] = _new_record(name)
            membership[key] = fallback

    for match, (a, b) in scored:
        diff = abs(a - b)
        team_a_won = a > b
        for names, won in ((match.team_a, team_a_won), (match.team_b, not team_a_won)):
            for name in names:
                key = slug(name)
                if not key:
                    continue
                record = buckets[membership[key]][key]
                if won:
                    record['wins'] += 1
                    record['point_diff'] += diff
                else:
                    record['losses'] += 1
                    record['point_diff'] -= diff

    return {
        'guys': rank_records(list(buckets[Gender.GUY].values()), tiebreaks),
        'girls': rank_records(list(buckets[Gender.GIRL].values()), tiebreaks),
    }
