UPPER = 'UPPER'
LOWER = 'LOWER'
REDEMPTION = 'RR'

# Same-gender teams formed from roster leftovers
ULTIMATE_REVCO = 'ULTIMATE_REVCO'  # two guys
POWER_PUFF = 'POWER_PUFF'  # two girls

BYE = 'BYE'


class PoolMatch:
    def __init__(self, round, court, team_a, team_b, tag=None, score_text='', id=None):
        self.id = id or f"R{round}-C{court}"
        self.round = round
        self.court = court
        self.team_a = list(team_a)
        self.team_b = list(team_b)
        self.tag = tag
        self.score_text = score_text or ''

    def players(self):
        return self.team_a + self.team_b

    def copy(self):
        return PoolMatch.from_dict(self.to_dict())

    def to_dict(self):
        return {
            'id': self.id,
            'round': self.round,
            'court': self.court,
            'teamA': list(self.team_a),
            'teamB': list(self.team_b),
            'tag': self.tag,
            'scoreText': self.score_text,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            round=data['round'],
            court=data['court'],
            team_a=data.get('teamA', []),
            team_b=data.get('teamB', []),
            tag=data.get('tag'),
            score_text=data.get('scoreText', ''),
            id=data.get('id'),
        )

    def __eq__(self, other):
        return isinstance(other, PoolMatch) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return (f"PoolMatch(round={self.round}, court={self.court}, team_a={self.team_a}, "
                f"team_b={self.team_b}, tag={self.tag}, score_text={self.score_text!r})")


class PlayoffTeam:
    def __init__(self, id, name, members, seed, division):
        self.id = id
        self.name = name
        self.members = list(members)
        self.seed = seed
        self.division = division

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'members': list(self.members),
            'seed': self.seed,
            'division': self.division,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(data['id'], data['name'], data['members'], data['seed'], data['division'])

    def __eq__(self, other):
        return isinstance(other, PlayoffTeam) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"PlayoffTeam(name={self.name}, seed={self.seed}, division={self.division})"


class BracketMatch:
    def __init__(self, id, division, round, slot, team1=None, team2=None, score=None,
                 court=None, next_id=None, next_side=None, loser_next_id=None,
                 loser_next_side=None):
        self.id = id
        self.division = division
        self.round = round
        self.slot = slot
        self.team1 = team1
        self.team2 = team2
        self.score = score
        self.court = court
        self.next_id = next_id  # parent match fed by the winner
        self.next_side = next_side
        self.loser_next_id = loser_next_id
        self.loser_next_side = loser_next_side

    @property
    def is_bye(self):
        return self.score == BYE

    def has_both_teams(self):
        return self.team1 is not None and self.team2 is not None

    def team_on(self, side):
        return self.team1 if side == 'team1' else self.team2

    def set_team(self, side, team):
        if side == 'team1':
            self.team1 = team
        else:
            self.team2 = team

    def copy(self):
        return BracketMatch.from_dict(self.to_dict())

    def to_dict(self):
        return {
            'id': self.id,
            'division': self.division,
            'round': self.round,
            'slot': self.slot,
            'team1': self.team1.to_dict() if self.team1 else None,
            'team2': self.team2.to_dict() if self.team2 else None,
            'score': self.score,
            'court': self.court,
            'nextId': self.next_id,
            'nextSide': self.next_side,
            'loserNextId': self.loser_next_id,
            'loserNextSide': self.loser_next_side,
        }

    @classmethod
    def from_dict(cls, data):
        team1 = data.get('team1')
        team2 = data.get('team2')
        return cls(
            id=data['id'],
            division=data['division'],
            round=data['round'],
            slot=data['slot'],
            team1=PlayoffTeam.from_dict(team1) if team1 else None,
            team2=PlayoffTeam.from_dict(team2) if team2 else None,
            score=data.get('score'),
            court=data.get('court'),
            next_id=data.get('nextId'),
            next_side=data.get('nextSide'),
            loser_next_id=data.get('loserNextId'),
            loser_next_side=data.get('loserNextSide'),
        )

    def __eq__(self, other):
        return isinstance(other, BracketMatch) and self.to_dict() == other.to_dict()

    def __repr__(self):
        team1 = self.team1.name if self.team1 else None
        team2 = self.team2.name if self.team2 else None
        return (f"BracketMatch(id={self.id}, team1={team1}, team2={team2}, "
                f"score={self.score}, court={self.court})")
