from datetime import datetime
from flask_sqlalchemy import SQLAlchemy
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

db = SQLAlchemy()

USER_ROLES = ('admin', 'referee')
TOURNAMENT_STATUSES = ('upcoming', 'active', 'completed')
MATCH_STATUSES = ('scheduled', 'in_progress', 'completed')

DEFAULT_RANKING = 1000


def _iso(value):
    return value.isoformat() if value else None


def _money(value):
    return float(value) if value is not None else None


class User(UserMixin, db.Model):
    __tablename__ = 'users'
    
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(50), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.String(20), nullable=False, default='referee')
    first_name = db.Column(db.String(50), nullable=False)
    last_name = db.Column(db.String(50), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    __table_args__ = (
        db.CheckConstraint("role IN ('admin', 'referee')", name='valid_user_role'),
    )
    
    def set_password(self, password: str):
        self.password_hash = generate_password_hash(password)
    
    def check_password(self, password: str) -> bool:
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)
    
    @property
    def is_admin(self) -> bool:
        return self.role == 'admin'
    
    @staticmethod
    def create_user(username: str, email: str, password: str, role: str,
                    first_name: str, last_name: str) -> 'User':
        """Create a new account with a hashed password."""
        user = User(
            username=username,
            email=email,
            role=role,
            first_name=first_name,
            last_name=last_name
        )
        user.set_password(password)
        return user
    
    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'role': self.role,
            'first_name': self.first_name,
            'last_name': self.last_name,
        }


class Player(db.Model):
    __tablename__ = 'players'
    
    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(50), nullable=False)
    last_name = db.Column(db.String(50), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=True)
    phone = db.Column(db.String(30), nullable=True)
    ranking = db.Column(db.Integer, nullable=False, default=DEFAULT_RANKING)
    wins = db.Column(db.Integer, nullable=False, default=0)
    losses = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    def to_summary(self):
        return {
            'id': self.id,
            'first_name': self.first_name,
            'last_name': self.last_name,
        }
    
    def to_dict(self):
        return {
            'id': self.id,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'email': self.email,
            'phone': self.phone,
            'ranking': self.ranking,
            'wins': self.wins,
            'losses': self.losses,
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at),
        }


class Team(db.Model):
    __tablename__ = 'teams'
    
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    player1_id = db.Column(db.Integer, db.ForeignKey('players.id'), nullable=False)
    player2_id = db.Column(db.Integer, db.ForeignKey('players.id'), nullable=False)
    ranking = db.Column(db.Integer, nullable=False, default=DEFAULT_RANKING)
    wins = db.Column(db.Integer, nullable=False, default=0)
    losses = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    player1 = db.relationship('Player', foreign_keys=[player1_id])
    player2 = db.relationship('Player', foreign_keys=[player2_id])
    
    __table_args__ = (
        db.CheckConstraint('player1_id <> player2_id', name='distinct_team_players'),
    )
    
    @property
    def players(self):
        return [self.player1, self.player2]
    
    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'player1_id': self.player1_id,
            'player2_id': self.player2_id,
            'ranking': self.ranking,
            'wins': self.wins,
            'losses': self.losses,
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at),
            'players': [p.to_summary() for p in self.players if p is not None],
        }


class Tournament(db.Model):
    __tablename__ = 'tournaments'
    
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=True)
    status = db.Column(db.String(20), nullable=False, default='upcoming')
    max_teams = db.Column(db.Integer, nullable=True)
    entry_fee = db.Column(db.Numeric(10, 2), nullable=True)
    prize_pool = db.Column(db.Numeric(10, 2), nullable=True)
    created_by = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    creator = db.relationship('User')
    matches = db.relationship('Match', back_populates='tournament',
                              order_by='Match.scheduled_at')
    
    __table_args__ = (
        db.CheckConstraint(
            "status IN ('upcoming', 'active', 'completed')",
            name='valid_tournament_status'
        ),
    )
    
    def to_dict(self, include_matches: bool = False):
        data = {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'start_date': _iso(self.start_date),
            'end_date': _iso(self.end_date),
            'status': self.status,
            'max_teams': self.max_teams,
            'entry_fee': _money(self.entry_fee),
            'prize_pool': _money(self.prize_pool),
            'created_by': self.created_by,
            'creator_first_name': self.creator.first_name if self.creator else None,
            'creator_last_name': self.creator.last_name if self.creator else None,
            'total_matches': len(self.matches),
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at),
        }
        if include_matches:
            data['matches'] = [m.to_dict() for m in self.matches]
        return data


class Match(db.Model):
    __tablename__ = 'matches'
    
    id = db.Column(db.Integer, primary_key=True)
    tournament_id = db.Column(db.Integer, db.ForeignKey('tournaments.id'), nullable=False)
    team1_id = db.Column(db.Integer, db.ForeignKey('teams.id'), nullable=False)
    team2_id = db.Column(db.Integer, db.ForeignKey('teams.id'), nullable=False)
    referee_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    scheduled_at = db.Column(db.DateTime, nullable=True)
    court_number = db.Column(db.Integer, nullable=True)
    status = db.Column(db.String(20), nullable=False, default='scheduled')
    
    # Per-set games won; unplayed sets stay 0-0
    team1_score_set1 = db.Column(db.Integer, nullable=False, default=0)
    team1_score_set2 = db.Column(db.Integer, nullable=False, default=0)
    team1_score_set3 = db.Column(db.Integer, nullable=False, default=0)
    team2_score_set1 = db.Column(db.Integer, nullable=False, default=0)
    team2_score_set2 = db.Column(db.Integer, nullable=False, default=0)
    team2_score_set3 = db.Column(db.Integer, nullable=False, default=0)
    
    winner_id = db.Column(db.Integer, db.ForeignKey('teams.id'), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    tournament = db.relationship('Tournament', back_populates='matches')
    team1 = db.relationship('Team', foreign_keys=[team1_id])
    team2 = db.relationship('Team', foreign_keys=[team2_id])
    winner = db.relationship('Team', foreign_keys=[winner_id])
    referee = db.relationship('User', foreign_keys=[referee_id])
    
    __table_args__ = (
        db.CheckConstraint('team1_id <> team2_id', name='distinct_match_teams'),
        db.CheckConstraint(
            "status IN ('scheduled', 'in_progress', 'completed')",
            name='valid_match_status'
        ),
        db.CheckConstraint(
            'winner_id IS NULL OR winner_id = team1_id OR winner_id = team2_id',
            name='winner_is_participant'
        ),
    )
    
    def to_dict(self, include_players: bool = False):
        data = {
            'id': self.id,
            'tournament_id': self.tournament_id,
            'team1_id': self.team1_id,
            'team2_id': self.team2_id,
            'referee_id': self.referee_id,
            'scheduled_at': _iso(self.scheduled_at),
            'court_number': self.court_number,
            'status': self.status,
            'team1_score_set1': self.team1_score_set1,
            'team1_score_set2': self.team1_score_set2,
            'team1_score_set3': self.team1_score_set3,
            'team2_score_set1': self.team2_score_set1,
            'team2_score_set2': self.team2_score_set2,
            'team2_score_set3': self.team2_score_set3,
            'winner_id': self.winner_id,
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at),
            'team1_name': self.team1.name if self.team1 else None,
            'team2_name': self.team2.name if self.team2 else None,
            'tournament_name': self.tournament.name if self.tournament else None,
            'referee_first_name': self.referee.first_name if self.referee else None,
            'referee_last_name': self.referee.last_name if self.referee else None,
        }
        if include_players:
            data['team1_players'] = [p.to_summary() for p in self.team1.players] if self.team1 else []
            data['team2_players'] = [p.to_summary() for p in self.team2.players] if self.team2 else []
        return data
