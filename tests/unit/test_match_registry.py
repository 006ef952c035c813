"""
Unit tests for MatchRegistry.
Tests: create_match, list_matches, update_match, update_score, delete_match
"""
from datetime import datetime

import pytest
from padelscore.broadcaster import ScoreBroadcaster
from padelscore.errors import ForbiddenError, NotFoundError, ValidationError
from padelscore.match_registry import MatchRegistry
from padelscore.models import db, Match, Tournament, User


@pytest.fixture
def broadcaster(mocker):
    return mocker.Mock(spec=ScoreBroadcaster)


@pytest.fixture
def registry(broadcaster):
    return MatchRegistry(broadcaster)


def load_user(user):
    return db.session.get(User, user.id)


def set_scores(match, team):
    return [getattr(match, f'team{team}_score_set{n}') for n in (1, 2, 3)]


class TestCreateMatch:
    """Tests for create_match method."""
    
    def test_create(self, app, registry, sample_tournament, sample_teams, referee):
        with app.app_context():
            match = registry.create_match({
                'tournament_id': sample_tournament.id,
                'team1_id': sample_teams[0].id,
                'team2_id': sample_teams[1].id,
                'referee_id': referee.id,
                'scheduled_at': '2024-04-16T09:00:00Z',
                'court_number': 3
            })
            
            assert match.status == 'scheduled'
            assert set_scores(match, 1) == [0, 0, 0]
            assert set_scores(match, 2) == [0, 0, 0]
            assert match.winner_id is None
            assert match.scheduled_at == datetime(2024, 4, 16, 9, 0)
            
            data = match.to_dict()
            assert data['team1_name'] == 'Team Thunder'
            assert data['tournament_name'] == 'Spring Open 2024'
            assert data['referee_first_name'] == 'Emily'
    
    def test_requires_ids(self, app, registry, sample_tournament, sample_teams):
        with app.app_context():
            with pytest.raises(ValidationError) as exc:
                registry.create_match({'tournament_id': sample_tournament.id,
                                       'team1_id': sample_teams[0].id})
            
            assert exc.value.message == 'Tournament ID, team1 ID, and team2 ID are required'
    
    def test_team_against_itself(self, app, registry, sample_tournament, sample_teams):
        """Rejected before anything is written."""
        with app.app_context():
            with pytest.raises(ValidationError):
                registry.create_match({
                    'tournament_id': sample_tournament.id,
                    'team1_id': sample_teams[0].id,
                    'team2_id': sample_teams[0].id
                })
            
            assert Match.query.count() == 0
    
    @pytest.mark.parametrize('field,message', [
        ('tournament_id', 'Tournament not found'),
        ('team2_id', 'One or both teams not found'),
        ('referee_id', 'Referee not found'),
    ])
    def test_unknown_references(self, app, registry, sample_tournament, sample_teams,
                                field, message):
        payload = {
            'tournament_id': sample_tournament.id,
            'team1_id': sample_teams[0].id,
            'team2_id': sample_teams[1].id,
        }
        payload[field] = 9999
        
        with app.app_context():
            with pytest.raises(ValidationError) as exc:
                registry.create_match(payload)
            
            assert exc.value.message == message
            assert Match.query.count() == 0


class TestListMatches:
    """Tests for list_matches method."""
    
    def test_schedule_order(self, seeded, registry):
        with seeded.app_context():
            times = [m.scheduled_at for m in registry.list_matches()]
        
        assert len(times) == 6
        assert times == sorted(times)
    
    def test_filters(self, seeded, registry):
        with seeded.app_context():
            assert len(registry.list_matches(status='completed')) == 3
            assert len(registry.list_matches(status='scheduled')) == 2
            
            spring_id = Tournament.query.filter_by(name='Spring Open 2024').one().id
            spring = registry.list_matches(tournament_id=spring_id)
            assert len(spring) == 2
            assert {m.tournament.name for m in spring} == {'Spring Open 2024'}
            assert registry.list_matches(status='in_progress', tournament_id=spring_id) == []


class TestUpdateMatch:
    """Tests for update_match method."""
    
    def test_reassign_court_and_referee(self, app, registry, sample_match, other_referee):
        with app.app_context():
            match = registry.update_match(sample_match.id, {
                'court_number': 4,
                'referee_id': other_referee.id
            })
            
            assert match.court_number == 4
            assert match.referee_id == other_referee.id
            assert match.scheduled_at == sample_match.scheduled_at
    
    def test_does_not_touch_scores(self, app, registry, sample_match):
        with app.app_context():
            match = registry.update_match(sample_match.id, {'team1_score_set1': 6})
            
            assert match.team1_score_set1 == 0
    
    def test_missing(self, app, registry, db_session):
        with app.app_context():
            with pytest.raises(NotFoundError):
                registry.update_match(3, {'court_number': 1})


class TestUpdateScore:
    """Tests for update_score method."""
    
    def test_assigned_referee(self, app, registry, broadcaster, sample_match, referee):
        """The assigned referee scores the match and viewers are notified."""
        with app.app_context():
            match = registry.update_score(sample_match.id, {
                'team1_score_set1': 6,
                'team2_score_set1': 4,
                'status': 'in_progress'
            }, identity=load_user(referee))
            
            assert set_scores(match, 1) == [6, 0, 0]
            assert set_scores(match, 2) == [4, 0, 0]
            assert match.status == 'in_progress'
        
        broadcaster.publish.assert_called_once()
        match_id, payload = broadcaster.publish.call_args.args
        assert match_id == sample_match.id
        assert payload['team1_score_set1'] == 6
        assert payload['status'] == 'in_progress'
    
    def test_other_referee_forbidden(self, app, registry, broadcaster, sample_match,
                                     other_referee):
        """A referee not assigned to the match is refused and nothing changes."""
        with app.app_context():
            with pytest.raises(ForbiddenError) as exc:
                registry.update_score(sample_match.id, {'team1_score_set1': 6},
                                      identity=load_user(other_referee))
            
            assert exc.value.message == 'You can only update scores for matches you are refereeing'
            assert db.session.get(Match, sample_match.id).team1_score_set1 == 0
        
        broadcaster.publish.assert_not_called()
    
    def test_admin_scores_any_match(self, app, registry, sample_match, admin):
        with app.app_context():
            match = registry.update_score(sample_match.id, {
                'team1_score_set1': 6, 'team2_score_set1': 3,
                'team1_score_set2': 6, 'team2_score_set2': 4,
                'status': 'completed',
                'winner_id': sample_match.team1_id
            }, identity=load_user(admin))
            
            assert match.winner_id == sample_match.team1_id
            assert match.status == 'completed'
    
    def test_winner_must_play(self, app, registry, broadcaster, sample_match, admin):
        with app.app_context():
            with pytest.raises(ValidationError):
                registry.update_score(sample_match.id, {'winner_id': 9999},
                                      identity=load_user(admin))
        
        broadcaster.publish.assert_not_called()
    
    def test_missing_match_checked_first(self, app, registry, db_session, other_referee):
        """An unknown match is a 404 even for a referee who could not score it."""
        with app.app_context():
            with pytest.raises(NotFoundError):
                registry.update_score(12345, {}, identity=load_user(other_referee))
    
    def test_partial_update_keeps_other_sets(self, app, registry, sample_match, referee):
        with app.app_context():
            identity = load_user(referee)
            registry.update_score(sample_match.id,
                                  {'team1_score_set1': 6, 'team2_score_set1': 2},
                                  identity=identity)
            match = registry.update_score(sample_match.id,
                                          {'team1_score_set2': 1},
                                          identity=identity)
            
            assert set_scores(match, 1) == [6, 1, 0]
            assert set_scores(match, 2) == [2, 0, 0]
    
    def test_real_broadcaster_delivers(self, app, sample_match, referee):
        broadcaster = ScoreBroadcaster()
        viewer = broadcaster.subscribe(sample_match.id)
        
        with app.app_context():
            MatchRegistry(broadcaster).update_score(
                sample_match.id, {'team2_score_set1': 5}, identity=load_user(referee)
            )
        
        event = viewer.next_event(timeout=1)
        assert event.match_id == sample_match.id
        assert event.match['team2_score_set1'] == 5


class TestDeleteMatch:
    """Tests for delete_match method."""
    
    def test_delete(self, app, registry, sample_match):
        with app.app_context():
            registry.delete_match(sample_match.id)
            
            assert registry.get_match(sample_match.id) is None
    
    def test_delete_missing(self, app, registry, db_session):
        with app.app_context():
            with pytest.raises(NotFoundError):
                registry.delete_match(1)
