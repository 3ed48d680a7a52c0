"""
Shared pytest fixtures for blind draw tournament tests.

Running tests:
    pytest tests/
"""
import pytest
import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from blinddraw.models import PoolMatch, PlayoffTeam, UPPER


@pytest.fixture
def eight_guys():
    return ["Adam", "Ben", "Carl", "Dan", "Eli", "Finn", "Gus", "Hank"]


@pytest.fixture
def eight_girls():
    return ["Ava", "Bea", "Cleo", "Dee", "Eve", "Faye", "Gia", "Hope"]


@pytest.fixture
def scored_history():
    """Two pool matches with valid scores and one still being played."""
    return [
        PoolMatch(round=1, court=1, team_a=["Al", "Cy"], team_b=["Bo", "Di"], score_text="21-15"),
        PoolMatch(round=1, court=2, team_a=["Ed", "Fay"], team_b=["Gil", "Hal"], score_text="19-21"),
        PoolMatch(round=2, court=1, team_a=["Al", "Di"], team_b=["Bo", "Cy"], score_text=""),
    ]


@pytest.fixture
def sample_standings():
    """Ranked standings for four guys and four girls."""
    return {
        'guys': [
            {'name': 'G1', 'wins': 3, 'losses': 0, 'point_diff': 20},
            {'name': 'G2', 'wins': 2, 'losses': 1, 'point_diff': 8},
            {'name': 'G3', 'wins': 1, 'losses': 2, 'point_diff': -4},
            {'name': 'G4', 'wins': 0, 'losses': 3, 'point_diff': -24},
        ],
        'girls': [
            {'name': 'H1', 'wins': 3, 'losses': 0, 'point_diff': 18},
            {'name': 'H2', 'wins': 2, 'losses': 1, 'point_diff': 4},
            {'name': 'H3', 'wins': 1, 'losses': 2, 'point_diff': -2},
            {'name': 'H4', 'wins': 0, 'losses': 3, 'point_diff': -20},
        ],
    }


def make_teams(count, division=UPPER):
    """Seeded placeholder teams 'Seed1'..'SeedN'."""
    return [
        PlayoffTeam(
            id=f"{division}-{seed}-seed{seed}",
            name=f"Seed{seed}",
            members=[f"Guy{seed}", f"Girl{seed}"],
            seed=seed,
            division=division,
        )
        for seed in range(1, count + 1)
    ]


@pytest.fixture
def team_factory():
    return make_teams
