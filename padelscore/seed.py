"""
Demo data: one admin, three referees, twelve players, six teams, four
tournaments and six matches. Loading is idempotent: nothing is inserted once
any user account exists.
"""
import logging
from datetime import date, datetime
from decimal import Decimal

from .models import db, User, Player, Team, Tournament, Match

logger = logging.getLogger(__name__)

USERS = [
    ('admin', 'admin@padelscore.com', 'admin123', 'admin', 'Admin', 'User'),
    ('emily_carter', 'emily.carter@email.com', 'referee123', 'referee', 'Emily', 'Carter'),
    ('david_lee', 'david.lee@email.com', 'referee456', 'referee', 'David', 'Lee'),
    ('sophia_rodriguez', 'sophia.rodriguez@email.com', 'referee123', 'referee', 'Sophia', 'Rodriguez'),
]

PLAYERS = [
    ('Liam', 'Harper', 'liam.harper@email.com', 1500, 25, 5),
    ('Olivia', 'Bennett', 'olivia.bennett@email.com', 1450, 22, 8),
    ('Noah', 'Foster', 'noah.foster@email.com', 1400, 20, 10),
    ('Ava', 'Coleman', 'ava.coleman@email.com', 1350, 18, 12),
    ('Ethan', 'Hayes', 'ethan.hayes@email.com', 1300, 15, 15),
    ('Isabella', 'Price', 'isabella.price@email.com', 1280, 14, 16),
    ('Mason', 'Ward', 'mason.ward@email.com', 1250, 12, 18),
    ('Sofia', 'Torres', 'sofia.torres@email.com', 1220, 10, 20),
    ('Lucas', 'Morgan', 'lucas.morgan@email.com', 1200, 8, 22),
    ('Emma', 'Cooper', 'emma.cooper@email.com', 1150, 5, 25),
    ('James', 'Rivera', 'james.rivera@email.com', 1120, 4, 26),
    ('Charlotte', 'Bailey', 'charlotte.bailey@email.com', 1100, 3, 27),
]

# (name, player indexes, ranking, wins, losses)
TEAMS = [
    ('Team Thunder', (0, 1), 1475, 15, 3),
    ('Team Lightning', (2, 3), 1375, 12, 6),
    ('Team Storm', (4, 5), 1290, 10, 8),
    ('Team Blaze', (6, 7), 1235, 8, 10),
    ('Team Frost', (8, 9), 1175, 6, 12),
    ('Team Shadow', (10, 11), 1110, 4, 14),
]

TOURNAMENTS = [
    ('Spring Open 2024', 'Annual spring tournament for all skill levels',
     date(2024, 4, 15), date(2024, 4, 17), 'completed', 16, '50.00', '800.00'),
    ('Summer Slam 2024', 'High-intensity summer competition',
     date(2024, 7, 20), date(2024, 7, 22), 'completed', 12, '75.00', '900.00'),
    ('Autumn Cup 2024', 'Fall championship series',
     date(2024, 10, 10), date(2024, 10, 12), 'active', 20, '60.00', '1200.00'),
    ('Winter Classic 2024', 'End of year tournament',
     date(2024, 12, 15), date(2024, 12, 17), 'upcoming', 18, '80.00', '1440.00'),
]

# (tournament, team1, team2, referee user, scheduled, status, court,
#  team1 sets, team2 sets, winner team) -- all indexes into the lists above
MATCHES = [
    (0, 0, 1, 1, datetime(2024, 4, 15, 10, 0), 'completed', 1, (6, 4, 0), (3, 6, 0), 0),
    (0, 2, 3, 2, datetime(2024, 4, 15, 11, 30), 'completed', 2, (6, 6, 0), (4, 2, 0), 2),
    (1, 1, 2, 1, datetime(2024, 7, 20, 14, 0), 'completed', 1, (4, 6, 6), (6, 3, 4), 1),
    (2, 0, 2, 1, datetime(2024, 10, 10, 9, 0), 'in_progress', 1, (6, 0, 0), (4, 0, 0), None),
    (2, 1, 3, 2, datetime(2024, 10, 10, 10, 30), 'scheduled', 2, (0, 0, 0), (0, 0, 0), None),
    (3, 0, 3, 3, datetime(2024, 12, 15, 11, 0), 'scheduled', 1, (0, 0, 0), (0, 0, 0), None),
]


def seed_database() -> bool:
    """Insert the demo data set. Returns False when data was already present."""
    if User.query.first() is not None:
        logger.info("Database already seeded, skipping")
        return False
    
    users = [User.create_user(*row) for row in USERS]
    db.session.add_all(users)
    
    players = [
        Player(first_name=first, last_name=last, email=email,
               ranking=ranking, wins=wins, losses=losses)
        for first, last, email, ranking, wins, losses in PLAYERS
    ]
    db.session.add_all(players)
    
    teams = [
        Team(name=name, player1=players[a], player2=players[b],
             ranking=ranking, wins=wins, losses=losses)
        for name, (a, b), ranking, wins, losses in TEAMS
    ]
    db.session.add_all(teams)
    
    tournaments = [
        Tournament(name=name, description=description, start_date=start,
                   end_date=end, status=status, max_teams=max_teams,
                   entry_fee=Decimal(fee), prize_pool=Decimal(prize),
                   creator=users[0])
        for name, description, start, end, status, max_teams, fee, prize in TOURNAMENTS
    ]
    db.session.add_all(tournaments)
    
    for t, a, b, ref, scheduled, status, court, sets1, sets2, winner in MATCHES:
        db.session.add(Match(
            tournament=tournaments[t],
            team1=teams[a],
            team2=teams[b],
            referee=users[ref],
            scheduled_at=scheduled,
            status=status,
            court_number=court,
            team1_score_set1=sets1[0], team1_score_set2=sets1[1], team1_score_set3=sets1[2],
            team2_score_set1=sets2[0], team2_score_set2=sets2[1], team2_score_set3=sets2[2],
            winner=teams[winner] if winner is not None else None,
        ))
    
    db.session.commit()
    logger.info(
        f"Seeded {len(users)} users, {len(players)} players, {len(teams)} teams, "
        f"{len(tournaments)} tournaments, {len(MATCHES)} matches"
    )
    return True
