from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user

from padelscore.auth import roles_required
from padelscore.errors import NotFoundError
from padelscore.patches import parse_int

bp = Blueprint('matches', __name__, url_prefix='/api/matches')


@bp.route('', methods=['GET'])
def list_matches():
    """List matches with optional status / tournament_id filters."""
    tournament_id = request.args.get('tournament_id')
    if tournament_id is not None:
        tournament_id = parse_int('tournament_id', tournament_id)
    
    matches = current_app.matches.list_matches(
        status=request.args.get('status'),
        tournament_id=tournament_id
    )
    return jsonify({
        'matches': [m.to_dict() for m in matches],
        'total': len(matches)
    })


@bp.route('/<int:match_id>', methods=['GET'])
def get_match(match_id: int):
    match = current_app.matches.get_match(match_id)
    if not match:
        raise NotFoundError('Match not found')
    return jsonify({'match': match.to_dict(include_players=True)})


@bp.route('', methods=['POST'])
@roles_required('admin')
def create_match():
    match = current_app.matches.create_match(request.get_json(silent=True) or {})
    return jsonify({
        'message': 'Match created successfully',
        'match': match.to_dict()
    }), 201


@bp.route('/<int:match_id>/score', methods=['PUT'])
@roles_required('admin', 'referee')
def update_score(match_id: int):
    """Record set scores; everyone watching the match gets the new state."""
    match = current_app.matches.update_score(
        match_id,
        request.get_json(silent=True) or {},
        identity=current_user
    )
    return jsonify({
        'message': 'Match score updated successfully',
        'match': match.to_dict()
    })


@bp.route('/<int:match_id>', methods=['PUT'])
@roles_required('admin')
def update_match(match_id: int):
    match = current_app.matches.update_match(match_id, request.get_json(silent=True) or {})
    return jsonify({
        'message': 'Match updated successfully',
        'match': match.to_dict()
    })


@bp.route('/<int:match_id>', methods=['DELETE'])
@roles_required('admin')
def delete_match(match_id: int):
    current_app.matches.delete_match(match_id)
    return jsonify({'message': 'Match deleted successfully'})
