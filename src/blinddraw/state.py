"""
The tournament state document and the transitions applied to it.

A TournamentState holds everything a tournament needs: the two roster texts,
the pool match log and the bracket matches. Transitions never edit a state in
place; each returns a new state.
"""
import logging
from typing import Dict, List, Optional

from blinddraw.elimination import get_champion, record_bracket_score
from blinddraw.models import LOWER, REDEMPTION, UPPER, BracketMatch, PoolMatch
from blinddraw.playoffs import build_playoff_brackets
from blinddraw.redemption import build_redemption_rally
from blinddraw.rounds import delete_round, generate_round_batch, record_pool_score
from blinddraw.roster import parse_roster
from blinddraw.scoring import pool_score_status
from blinddraw.settings import get_default_settings
from blinddraw.standings import compute_standings

logger = logging.getLogger(__name__)


class TournamentState:
    def __init__(self, guys_text='', girls_text='', matches=None, brackets=None):
        self.guys_text = guys_text or ''
        self.girls_text = girls_text or ''
        self.matches = list(matches or [])
        self.brackets = list(brackets or [])

    @property
    def guys(self) -> List[str]:
        return parse_roster(self.guys_text)

    @property
    def girls(self) -> List[str]:
        return parse_roster(self.girls_text)

    def replace(self, **changes) -> 'TournamentState':
        values = {
            'guys_text': self.guys_text,
            'girls_text': self.girls_text,
            'matches': [m.copy() for m in self.matches],
            'brackets': [b.copy() for b in self.brackets],
        }
        values.update(changes)
        return TournamentState(**values)

    def to_dict(self) -> Dict:
        return {
            'guysText': self.guys_text,
            'girlsText': self.girls_text,
            'matches': [m.to_dict() for m in self.matches],
            'brackets': [b.to_dict() for b in self.brackets],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'TournamentState':
        return cls(
            guys_text=data.get('guysText', ''),
            girls_text=data.get('girlsText', ''),
            matches=[PoolMatch.from_dict(m) for m in data.get('matches') or []],
            brackets=[BracketMatch.from_dict(b) for b in data.get('brackets') or []],
        )

    def __repr__(self):
        return (f"TournamentState(guys={len(self.guys)}, girls={len(self.girls)}, "
                f"matches={len(self.matches)}, brackets={len(self.brackets)})")


def standings_for(state: TournamentState, tiebreaks: Optional[Dict[str, int]] = None,
                  unknown_policy: str = 'guys') -> Dict[str, List[Dict]]:
    return compute_standings(state.matches, state.guys, state.girls,
                             tiebreaks=tiebreaks, unknown_policy=unknown_policy)


def invalid_scores(state: TournamentState) -> List[str]:
    """Ids of pool matches whose entered score is flagged as invalid."""
    return [m.id for m in state.matches if pool_score_status(m.score_text) == 'invalid']


def with_generated_rounds(state: TournamentState, settings: Optional[Dict] = None,
                          seed: Optional[int] = None) -> TournamentState:
    settings = settings or get_default_settings()
    batch = generate_round_batch(
        state.guys, state.girls, state.matches,
        strict=settings['strict'],
        seed=seed,
        round_count=settings['rounds_to_generate'],
        start_court=settings['start_court'],
    )
    return state.replace(matches=[m.copy() for m in state.matches] + batch['matches'])


def with_pool_score(state: TournamentState, match_id: str, score_text: str) -> TournamentState:
    return state.replace(matches=record_pool_score(state.matches, match_id, score_text))


def with_round_deleted(state: TournamentState, round_number: int) -> TournamentState:
    return state.replace(matches=delete_round(state.matches, round_number))


def with_playoff_brackets(state: TournamentState, settings: Optional[Dict] = None,
                          tiebreaks: Optional[Dict[str, int]] = None,
                          seed: Optional[int] = None) -> TournamentState:
    """Replace all brackets (Redemption Rally included) with fresh Upper and Lower brackets."""
    settings = settings or get_default_settings()
    if any(b.division == REDEMPTION for b in state.brackets):
        logger.info("Rebuilding playoffs discards the current Redemption Rally bracket")
    brackets = build_playoff_brackets(
        standings_for(state, tiebreaks),
        upper_size=settings['upper_size'],
        window_size=settings['pairing_window'],
        randomize=settings['randomize_within_window'],
        byes_upper=settings['byes_upper'],
        byes_lower=settings['byes_lower'],
        seed=seed,
        upper_courts=settings['upper_courts'],
        lower_courts=settings['lower_courts'],
    )
    return state.replace(brackets=brackets)


def with_bracket_score(state: TournamentState, match_id: str, score_text: str) -> TournamentState:
    return state.replace(brackets=record_bracket_score(state.brackets, match_id, score_text))


def with_redemption_rally(state: TournamentState, settings: Optional[Dict] = None,
                          seed: Optional[int] = None) -> TournamentState:
    """Rebuild the Redemption Rally bracket, keeping Upper and Lower as they are."""
    settings = settings or get_default_settings()
    main = [b.copy() for b in state.brackets if b.division in (UPPER, LOWER)]
    rally = build_redemption_rally(main, settings['redemption_randomize_partners'], seed,
                                   settings['lower_courts'])
    return state.replace(brackets=main + rally)


def tournament_phase(state: TournamentState) -> str:
    """
    Determine the current phase of the tournament.

    Returns:
        One of: 'setup', 'pool_play', 'playoffs', 'complete'.
    """
    if not state.brackets:
        return 'pool_play' if state.matches else 'setup'

    divisions = [d for d in (UPPER, LOWER, REDEMPTION) if any(b.division == d for b in state.brackets)]
    if all(get_champion(state.brackets, d) is not None for d in divisions):
        return 'complete'
    return 'playoffs'
