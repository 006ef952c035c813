from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user

from padelscore.auth import roles_required
from padelscore.errors import NotFoundError

bp = Blueprint('tournaments', __name__, url_prefix='/api/tournaments')


@bp.route('', methods=['GET'])
def list_tournaments():
    """List tournaments, newest start date first, optionally by status."""
    tournaments = current_app.tournaments.list_tournaments(status=request.args.get('status'))
    return jsonify({
        'tournaments': [t.to_dict() for t in tournaments],
        'total': len(tournaments)
    })


@bp.route('/<int:tournament_id>', methods=['GET'])
def get_tournament(tournament_id: int):
    """Tournament details with its matches in schedule order."""
    tournament = current_app.tournaments.get_tournament(tournament_id)
    if not tournament:
        raise NotFoundError('Tournament not found')
    return jsonify({'tournament': tournament.to_dict(include_matches=True)})


@bp.route('', methods=['POST'])
@roles_required('admin')
def create_tournament():
    tournament = current_app.tournaments.create_tournament(
        request.get_json(silent=True) or {},
        creator=current_user
    )
    return jsonify({
        'message': 'Tournament created successfully',
        'tournament': tournament.to_dict()
    }), 201


@bp.route('/<int:tournament_id>', methods=['PUT'])
@roles_required('admin')
def update_tournament(tournament_id: int):
    tournament = current_app.tournaments.update_tournament(
        tournament_id,
        request.get_json(silent=True) or {}
    )
    return jsonify({
        'message': 'Tournament updated successfully',
        'tournament': tournament.to_dict()
    })


@bp.route('/<int:tournament_id>', methods=['DELETE'])
@roles_required('admin')
def delete_tournament(tournament_id: int):
    current_app.tournaments.delete_tournament(tournament_id)
    return jsonify({'message': 'Tournament deleted successfully'})


@bp.route('/<int:tournament_id>/leaderboard', methods=['GET'])
def tournament_leaderboard(tournament_id: int):
    leaderboard = current_app.leaderboard.build(tournament_id)
    return jsonify({
        'leaderboard': [e.to_dict() for e in leaderboard.entries],
        'tournament_id': leaderboard.tournament_id
    })
