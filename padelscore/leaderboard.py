"""
Tournament standings.

Standings are derived on every request from the matches table; nothing is
cached or stored. A team appears once it has any match in the tournament,
whatever that match's status.
"""
from dataclasses import dataclass, asdict, field
from datetime import datetime
from typing import List

from sqlalchemy import and_, case, func, or_
from sqlalchemy.orm import aliased

from .errors import NotFoundError
from .models import db, Match, Player, Team, Tournament

POINTS_PER_WIN = 3
SETS = (1, 2, 3)


@dataclass
class LeaderboardEntry:
    id: int
    name: str
    ranking: int
    player1_name: str
    player2_name: str
    matches_played: int
    wins: int
    losses: int
    points: int
    sets_won: int
    
    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Leaderboard:
    tournament_id: int
    tournament_name: str
    entries: List[LeaderboardEntry] = field(default_factory=list)
    generated_at: str = None
    
    def __post_init__(self):
        if self.generated_at is None:
            self.generated_at = datetime.utcnow().isoformat() + "Z"
    
    @property
    def total(self) -> int:
        return len(self.entries)
    
    def to_dict(self) -> dict:
        return {
            'tournament': {
                'id': self.tournament_id,
                'name': self.tournament_name
            },
            'leaderboard': [e.to_dict() for e in self.entries],
            'total_teams': self.total,
            'updated_at': self.generated_at
        }


def _sets_won_as(side: int):
    """Sets in which ``side`` (1 or 2) scored strictly more games than the opponent."""
    other = 2 if side == 1 else 1
    won = [
        case(
            (getattr(Match, f'team{side}_score_set{n}') > getattr(Match, f'team{other}_score_set{n}'), 1),
            else_=0
        )
        for n in SETS
    ]
    return won[0] + won[1] + won[2]


class LeaderboardAggregator:
    """
    Ranks the teams of one tournament.
    
    - matches_played / wins count completed matches only
    - points = 3 per win, padel has no draws
    - sets_won counts every match of the team in the tournament, including
      ones still in progress
    - order: points, wins, sets_won, then the team's own ranking, all descending
    """
    
    def build(self, tournament_id: int) -> Leaderboard:
        tournament = db.session.get(Tournament, tournament_id)
        if tournament is None:
            raise NotFoundError('Tournament not found')
        
        return Leaderboard(
            tournament_id=tournament.id,
            tournament_name=tournament.name,
            entries=self.standings(tournament.id)
        )
    
    def standings(self, tournament_id: int) -> List[LeaderboardEntry]:
        p1 = aliased(Player)
        p2 = aliased(Player)
        
        completed = Match.status == 'completed'
        matches_played = func.count(case((completed, Match.id)))
        wins = func.sum(case((and_(completed, Match.winner_id == Team.id), 1), else_=0))
        points = wins * POINTS_PER_WIN
        sets_won = func.sum(
            case((Match.team1_id == Team.id, _sets_won_as(1)), else_=_sets_won_as(2))
        )
        
        rows = (
            db.session.query(
                Team.id,
                Team.name,
                Team.ranking,
                p1.first_name.label('p1_first'),
                p1.last_name.label('p1_last'),
                p2.first_name.label('p2_first'),
                p2.last_name.label('p2_last'),
                matches_played.label('matches_played'),
                wins.label('wins'),
                points.label('points'),
                sets_won.label('sets_won'),
            )
            .join(p1, Team.player1_id == p1.id)
            .join(p2, Team.player2_id == p2.id)
            .join(Match, or_(Match.team1_id == Team.id, Match.team2_id == Team.id))
            .filter(Match.tournament_id == tournament_id)
            .group_by(
                Team.id, Team.name, Team.ranking,
                p1.first_name, p1.last_name, p2.first_name, p2.last_name
            )
            .order_by(
                points.desc(),
                wins.desc(),
                sets_won.desc(),
                Team.ranking.desc(),
                Team.id
            )
            .all()
        )
        
        entries = []
        for row in rows:
            played = int(row.matches_played or 0)
            won = int(row.wins or 0)
            entries.append(LeaderboardEntry(
                id=row.id,
                name=row.name,
                ranking=row.ranking,
                player1_name=f"{row.p1_first} {row.p1_last}",
                player2_name=f"{row.p2_first} {row.p2_last}",
                matches_played=played,
                wins=won,
                losses=played - won,
                points=int(row.points or 0),
                sets_won=int(row.sets_won or 0),
            ))
        return entries
