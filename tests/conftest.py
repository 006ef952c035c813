"""
Pytest configuration and fixtures for PadelScore tests.

Fixtures open their own short-lived app contexts and hand back detached,
fully-loaded model instances; requests made through the test client then get
a fresh context (and a fresh ``current_user``) each time.
"""
import os
import sys
from datetime import date, datetime

import pytest

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

# Set testing environment before importing app
os.environ['FLASK_ENV'] = 'testing'

from padelscore.app import create_app
from padelscore.auth import issue_token
from padelscore.models import db, User, Player, Team, Tournament, Match


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app('testing')
    
    with app.app_context():
        db.create_all()
    
    yield app
    
    with app.app_context():
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Empty every table before the test runs."""
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
    
    yield db.session


def persist(app, *objs):
    """Insert ``objs`` and return them detached with every column loaded."""
    with app.app_context():
        db.session.add_all(objs)
        db.session.commit()
        for obj in objs:
            db.session.refresh(obj)
    return objs


def bearer(app, user):
    with app.app_context():
        return {'Authorization': f'Bearer {issue_token(user)}'}


@pytest.fixture
def admin(app, db_session):
    user, = persist(app, User.create_user(
        'admin', 'admin@padelscore.com', 'admin123', 'admin', 'Admin', 'User'
    ))
    return user


@pytest.fixture
def referee(app, db_session):
    user, = persist(app, User.create_user(
        'emily_carter', 'emily.carter@email.com', 'referee123', 'referee', 'Emily', 'Carter'
    ))
    return user


@pytest.fixture
def other_referee(app, db_session):
    user, = persist(app, User.create_user(
        'david_lee', 'david.lee@email.com', 'referee456', 'referee', 'David', 'Lee'
    ))
    return user


@pytest.fixture
def admin_headers(app, admin):
    return bearer(app, admin)


@pytest.fixture
def referee_headers(app, referee):
    return bearer(app, referee)


@pytest.fixture
def other_referee_headers(app, other_referee):
    return bearer(app, other_referee)


@pytest.fixture
def sample_players(app, db_session):
    """Four players with descending rankings."""
    names = [('Liam', 'Harper'), ('Olivia', 'Bennett'), ('Noah', 'Foster'), ('Ava', 'Coleman')]
    players = [
        Player(
            first_name=first,
            last_name=last,
            email=f'{first.lower()}.{last.lower()}@email.com',
            ranking=1500 - i * 50
        )
        for i, (first, last) in enumerate(names)
    ]
    return list(persist(app, *players))


@pytest.fixture
def sample_teams(app, sample_players):
    """Team Thunder (players 0, 1) and Team Lightning (players 2, 3)."""
    return list(persist(
        app,
        Team(name='Team Thunder', player1_id=sample_players[0].id,
             player2_id=sample_players[1].id, ranking=1475),
        Team(name='Team Lightning', player1_id=sample_players[2].id,
             player2_id=sample_players[3].id, ranking=1375),
    ))


@pytest.fixture
def sample_tournament(app, admin):
    tournament, = persist(app, Tournament(
        name='Spring Open 2024',
        description='Annual spring tournament',
        start_date=date(2024, 4, 15),
        end_date=date(2024, 4, 17),
        status='active',
        max_teams=16,
        created_by=admin.id
    ))
    return tournament


@pytest.fixture
def sample_match(app, sample_tournament, sample_teams, referee):
    """A scheduled match between the sample teams, refereed by ``referee``."""
    match, = persist(app, Match(
        tournament_id=sample_tournament.id,
        team1_id=sample_teams[0].id,
        team2_id=sample_teams[1].id,
        referee_id=referee.id,
        scheduled_at=datetime(2024, 4, 15, 10, 0),
        court_number=1
    ))
    return match


@pytest.fixture
def seeded(app, db_session):
    """The full demo data set."""
    from padelscore.seed import seed_database
    
    with app.app_context():
        seed_database()
    return app


@pytest.fixture
def save(app):
    """``persist`` bound to the test app."""
    return lambda *objs: persist(app, *objs)
