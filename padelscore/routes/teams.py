from flask import Blueprint, current_app, jsonify, request

from padelscore.auth import roles_required
from padelscore.errors import NotFoundError

bp = Blueprint('teams', __name__, url_prefix='/api/teams')


@bp.route('', methods=['GET'])
def list_teams():
    """Teams by ranking, each with its two players embedded."""
    teams = current_app.teams.list_teams()
    return jsonify({
        'teams': [t.to_dict() for t in teams],
        'total': len(teams)
    })


@bp.route('/<int:team_id>', methods=['GET'])
def get_team(team_id: int):
    team = current_app.teams.get_team(team_id)
    if not team:
        raise NotFoundError('Team not found')
    return jsonify({'team': team.to_dict()})


@bp.route('', methods=['POST'])
@roles_required('admin')
def create_team():
    team = current_app.teams.create_team(request.get_json(silent=True) or {})
    return jsonify({
        'message': 'Team created successfully',
        'team': team.to_dict()
    }), 201


@bp.route('/<int:team_id>', methods=['PUT'])
@roles_required('admin')
def update_team(team_id: int):
    team = current_app.teams.update_team(team_id, request.get_json(silent=True) or {})
    return jsonify({
        'message': 'Team updated successfully',
        'team': team.to_dict()
    })


@bp.route('/<int:team_id>', methods=['DELETE'])
@roles_required('admin')
def delete_team(team_id: int):
    current_app.teams.delete_team(team_id)
    return jsonify({'message': 'Team deleted successfully'})
