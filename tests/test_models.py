"""
Unit tests for the data models (PoolMatch, PlayoffTeam, BracketMatch).
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from blinddraw.models import PoolMatch, PlayoffTeam, BracketMatch, BYE, UPPER, ULTIMATE_REVCO


class TestPoolMatch:
    """Tests for the PoolMatch model."""

    def test_pool_match_creation(self):
        """Test the id is derived from round and court."""
        match = PoolMatch(round=2, court=7, team_a=["Al", "Cy"], team_b=["Bo", "Di"])
        assert match.id == "R2-C7"
        assert match.tag is None
        assert match.score_text == ""
        assert match.players() == ["Al", "Cy", "Bo", "Di"]

    def test_pool_match_document(self):
        """Test the stored document uses camelCase keys."""
        match = PoolMatch(round=1, court=1, team_a=["Al", "Bo"], team_b=["Cy", "Di"],
                          tag=ULTIMATE_REVCO, score_text="21-9")
        assert match.to_dict() == {
            'id': "R1-C1", 'round': 1, 'court': 1, 'teamA': ["Al", "Bo"], 'teamB': ["Cy", "Di"],
            'tag': ULTIMATE_REVCO, 'scoreText': "21-9",
        }

    def test_pool_match_from_sparse_document(self):
        """Test missing optional keys fall back to defaults."""
        match = PoolMatch.from_dict({'round': 3, 'court': 2, 'teamA': ["A", "B"], 'teamB': ["C", "D"]})
        assert match.id == "R3-C2"
        assert match.score_text == ""

    def test_pool_match_copy_is_independent(self):
        """Test copies do not share team lists."""
        match = PoolMatch(round=1, court=1, team_a=["Al", "Cy"], team_b=["Bo", "Di"])
        copy = match.copy()
        copy.team_a.append("Ed")
        assert match.team_a == ["Al", "Cy"]
        assert copy != match

    def test_pool_match_repr(self):
        """Test pool match string representation."""
        repr_str = repr(PoolMatch(round=1, court=3, team_a=["Al", "Cy"], team_b=["Bo", "Di"]))
        assert "court=3" in repr_str
        assert "Al" in repr_str


class TestPlayoffTeam:
    """Tests for the PlayoffTeam model."""

    def test_playoff_team_document(self):
        """Test to_dict / from_dict."""
        team = PlayoffTeam("UPPER-1-al & cy", "Al & Cy", ["Al", "Cy"], 1, UPPER)
        assert PlayoffTeam.from_dict(team.to_dict()) == team
        assert team.to_dict()['members'] == ["Al", "Cy"]

    def test_playoff_team_repr(self):
        """Test playoff team string representation."""
        repr_str = repr(PlayoffTeam("x", "Al & Cy", ["Al", "Cy"], 3, UPPER))
        assert "Al & Cy" in repr_str
        assert "seed=3" in repr_str


class TestBracketMatch:
    """Tests for the BracketMatch model."""

    def setup_method(self):
        self.team = PlayoffTeam("UPPER-1-a", "A", ["a1", "a2"], 1, UPPER)

    def test_bracket_match_defaults(self):
        """Test a fresh match is empty."""
        match = BracketMatch("UPPER-R2-1", UPPER, 2, 1)
        assert match.team1 is None and match.team2 is None
        assert not match.has_both_teams()
        assert not match.is_bye

    def test_bye(self):
        """Test the BYE placeholder."""
        assert BracketMatch("UPPER-R1-1", UPPER, 1, 1, score=BYE).is_bye

    def test_sides(self):
        """Test set_team / team_on."""
        match = BracketMatch("UPPER-R2-1", UPPER, 2, 1)
        match.set_team('team2', self.team)
        assert match.team_on('team2') is self.team
        assert match.team_on('team1') is None

    def test_bracket_match_document(self):
        """Test link fields are stored in camelCase and survive a copy."""
        match = BracketMatch("UPPER-R1-1", UPPER, 1, 1, team1=self.team, court=2,
                             next_id="UPPER-R2-1", next_side='team1')
        data = match.to_dict()
        assert data['nextId'] == "UPPER-R2-1"
        assert data['nextSide'] == 'team1'
        assert data['loserNextId'] is None
        assert data['team2'] is None
        assert match.copy() == match
        assert match.copy().team1 is not self.team
