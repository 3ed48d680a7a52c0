"""
Unit tests for the Redemption Rally bracket.
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from conftest import make_teams
from blinddraw.models import PlayoffTeam, UPPER, LOWER, REDEMPTION
from blinddraw.elimination import build_bracket, record_bracket_score
from blinddraw.redemption import (
    collect_early_losers,
    build_redemption_teams,
    build_redemption_rally,
)


@pytest.fixture
def played_brackets():
    """Upper and Lower brackets of four teams with some results in."""
    matches = build_bracket(UPPER, make_teams(4, UPPER)) + build_bracket(LOWER, make_teams(4, LOWER))
    matches = record_bracket_score(matches, "UPPER-R1-1", "21-15")
    matches = record_bracket_score(matches, "UPPER-R1-2", "10-21")
    matches = record_bracket_score(matches, "LOWER-R1-1", "22-24")
    return matches


class TestCollectEarlyLosers:
    """Tests for picking the teams that drop into the Redemption Rally."""

    def test_losers_in_bracket_order(self, played_brackets):
        losers = collect_early_losers(played_brackets)
        assert [(t.division, t.name) for t in losers] == [
            (UPPER, "Seed4"), (UPPER, "Seed2"), (LOWER, "Seed1"),
        ]

    def test_round_two_losers_count(self, played_brackets):
        matches = record_bracket_score(played_brackets, "UPPER-R2-1", "21-19")
        losers = collect_early_losers(matches)
        assert [(t.division, t.name) for t in losers] == [
            (UPPER, "Seed4"), (UPPER, "Seed2"), (UPPER, "Seed3"), (LOWER, "Seed1"),
        ]

    def test_later_rounds_do_not_count(self):
        matches = build_bracket(UPPER, make_teams(8))
        for match_id in ("UPPER-R1-1", "UPPER-R1-2", "UPPER-R1-3", "UPPER-R1-4",
                         "UPPER-R2-1", "UPPER-R2-2", "UPPER-R3-1"):
            matches = record_bracket_score(matches, match_id, "21-10")
        losers = collect_early_losers(matches)
        assert len(losers) == 6
        assert "Seed2" not in [t.name for t in losers]

    def test_byes_and_redemption_matches_are_skipped(self):
        matches = build_bracket(UPPER, make_teams(5))
        rally = build_bracket(REDEMPTION, make_teams(2, REDEMPTION))
        rally = record_bracket_score(rally, "RR-R1-1", "21-10")
        assert collect_early_losers(matches + rally) == []


class TestBuildRedemptionTeams:
    """Tests for turning losers into rally teams."""

    def test_pairs_stay_together(self):
        teams = build_redemption_teams(make_teams(3))
        assert [t.name for t in teams] == ["Guy1 & Girl1", "Guy2 & Girl2", "Guy3 & Girl3"]
        assert [t.seed for t in teams] == [1, 2, 3]
        assert teams[0].id == "RR-1-guy1 & girl1"
        assert all(t.division == REDEMPTION for t in teams)

    def test_randomized_partners(self):
        losers = make_teams(3)
        teams = build_redemption_teams(losers, randomize_partners=True, seed=4)
        assert len(teams) == 3
        members = sorted(name for t in teams for name in t.members)
        assert members == sorted(name for t in losers for name in t.members)

    def test_randomized_partners_are_reproducible(self):
        losers = make_teams(4)
        first = build_redemption_teams(losers, randomize_partners=True, seed=8)
        second = build_redemption_teams(losers, randomize_partners=True, seed=8)
        assert first == second

    def test_odd_player_sits_out(self):
        losers = [
            PlayoffTeam("UPPER-1-a", "A & B", ["A", "B"], 1, UPPER),
            PlayoffTeam("LOWER-1-b", "b & C", ["b", "C"], 1, LOWER),
        ]
        teams = build_redemption_teams(losers, randomize_partners=True, seed=1)
        assert len(teams) == 1

    def test_no_losers(self):
        assert build_redemption_teams([]) == []
        assert build_redemption_teams([], randomize_partners=True, seed=1) == []


class TestBuildRedemptionRally:
    """Tests for the rally bracket."""

    def test_bracket_from_losers(self, played_brackets):
        rally = build_redemption_rally(played_brackets)
        assert all(m.division == REDEMPTION for m in rally)
        round1 = [m for m in rally if m.round == 1]
        assert [m.id for m in round1] == ["RR-R1-1", "RR-R1-2"]
        assert round1[0].is_bye
        assert round1[1].team1.name == "Guy2 & Girl2"
        assert round1[1].team2.name == "Guy1 & Girl1"
        assert [m.court for m in round1] == [6, 7]

    def test_custom_courts(self, played_brackets):
        rally = build_redemption_rally(played_brackets, courts=[11])
        assert all(m.court == 11 for m in rally)

    def test_nothing_decided_yet(self):
        matches = build_bracket(UPPER, make_teams(4))
        assert build_redemption_rally(matches) == []
