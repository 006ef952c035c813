"""
Integration tests for the live score stream (/api/live).
"""
import json

import pytest


def read_frame(stream):
    return next(stream).decode()


def frame_data(frame):
    return json.loads(frame.split('data: ', 1)[1])


@pytest.fixture
def live(client, sample_match):
    """An open stream subscribed to the sample match."""
    response = client.get(f'/api/live?match_id={sample_match.id}', buffered=False)
    stream = iter(response.response)
    hello = frame_data(read_frame(stream))
    
    yield response, stream, hello
    
    response.close()


class TestStream:
    """Tests for GET /api/live."""
    
    def test_requires_match_id(self, client):
        response = client.get('/api/live')
        
        assert response.status_code == 400
        assert response.get_json() == {'error': 'match_id is required'}
    
    def test_subscribed_frame(self, app, live, sample_match):
        response, stream, hello = live
        
        assert response.mimetype == 'text/event-stream'
        assert response.headers['Cache-Control'] == 'no-cache'
        assert hello['matchIds'] == [sample_match.id]
        assert app.broadcaster.subscriber_count(sample_match.id) == 1
    
    def test_receives_score_update(self, client, live, referee_headers, sample_match):
        _, stream, _ = live
        
        client.put(f'/api/matches/{sample_match.id}/score', headers=referee_headers,
                   json={'team1_score_set1': 2, 'team2_score_set1': 1})
        
        frame = read_frame(stream)
        assert frame.startswith('event: score-update\n')
        payload = frame_data(frame)
        assert payload['matchId'] == sample_match.id
        assert payload['match']['team1_score_set1'] == 2
        assert payload['match']['team2_score_set1'] == 1
        assert payload['timestamp']
    
    def test_keepalive(self, live):
        _, stream, _ = live
        assert read_frame(stream) == ': keepalive\n\n'
    
    def test_disconnect_unsubscribes(self, app, client, sample_match):
        response = client.get(f'/api/live?match_id={sample_match.id}', buffered=False)
        stream = iter(response.response)
        read_frame(stream)
        assert app.broadcaster.subscriber_count(sample_match.id) == 1
        
        response.close()
        
        assert app.broadcaster.subscriber_count(sample_match.id) == 0


class TestJoinLeave:
    """Tests for joining and leaving matches on an open stream."""
    
    def test_join_and_leave(self, app, client, live, sample_match):
        _, _, hello = live
        subscriber_id = hello['subscriber_id']
        
        response = client.post(f'/api/live/{subscriber_id}/matches', json={'match_id': 77})
        assert response.status_code == 200
        assert set(response.get_json()['channels']) == {f'match-{sample_match.id}', 'match-77'}
        assert app.broadcaster.subscriber_count(77) == 1
        
        response = client.delete(f'/api/live/{subscriber_id}/matches/77')
        assert response.status_code == 200
        assert response.get_json()['channels'] == [f'match-{sample_match.id}']
        assert app.broadcaster.subscriber_count(77) == 0
    
    def test_join_bad_match_id(self, client, live):
        _, _, hello = live
        response = client.post(f"/api/live/{hello['subscriber_id']}/matches",
                               json={'match_id': 'seven'})
        assert response.status_code == 400
    
    def test_unknown_subscriber(self, client):
        response = client.post('/api/live/deadbeef/matches', json={'match_id': 1})
        
        assert response.status_code == 404
        assert response.get_json() == {'error': 'Subscriber not found'}
        assert client.delete('/api/live/deadbeef/matches/1').status_code == 404
