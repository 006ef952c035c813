import json

from flask import Blueprint, Response, current_app, jsonify, request

from padelscore.errors import NotFoundError, ValidationError

bp = Blueprint('live', __name__, url_prefix='/api/live')


@bp.route('', methods=['GET'])
def stream():
    """
    SSE stream of score updates.
    
    ``GET /api/live?match_id=1&match_id=2`` subscribes the connection to the
    given matches; each update arrives as an ``event: score-update`` frame
    carrying ``{matchId, match, timestamp}``. Closing the connection ends the
    subscription.
    """
    match_ids = request.args.getlist('match_id', type=int)
    if not match_ids:
        raise ValidationError('match_id is required')
    
    broadcaster = current_app.broadcaster
    keepalive = current_app.config['LIVE_KEEPALIVE_SECONDS']
    
    subscriber = None
    for match_id in match_ids:
        subscriber = broadcaster.subscribe(match_id, subscriber)
    
    def generate():
        try:
            hello = {'subscriber_id': subscriber.id, 'matchIds': match_ids}
            yield f"event: subscribed\ndata: {json.dumps(hello)}\n\n"
            
            while not subscriber.closed:
                event = subscriber.next_event(timeout=keepalive)
                if event is not None:
                    yield event.to_sse()
                elif not subscriber.closed:
                    yield ": keepalive\n\n"
        finally:
            broadcaster.unsubscribe(subscriber)
    
    return Response(generate(), mimetype='text/event-stream', headers={
        'Cache-Control': 'no-cache',
        'X-Accel-Buffering': 'no'
    })


@bp.route('/<subscriber_id>/matches', methods=['POST'])
def join_match(subscriber_id: str):
    """Add another match to an open stream."""
    subscriber = current_app.broadcaster.get_subscriber(subscriber_id)
    if subscriber is None or subscriber.closed:
        raise NotFoundError('Subscriber not found')
    
    data = request.get_json(silent=True) or {}
    match_id = data.get('match_id')
    if isinstance(match_id, bool) or not isinstance(match_id, int):
        raise ValidationError('match_id must be an integer')
    
    current_app.broadcaster.subscribe(match_id, subscriber)
    return jsonify({'message': f'Joined match {match_id}', 'channels': sorted(subscriber.channels)})


@bp.route('/<subscriber_id>/matches/<int:match_id>', methods=['DELETE'])
def leave_match(subscriber_id: str, match_id: int):
    subscriber = current_app.broadcaster.get_subscriber(subscriber_id)
    if subscriber is None:
        raise NotFoundError('Subscriber not found')
    
    current_app.broadcaster.unsubscribe(subscriber, match_id)
    return jsonify({'message': f'Left match {match_id}', 'channels': sorted(subscriber.channels)})
