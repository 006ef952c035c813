from flask import Blueprint, current_app, jsonify, request

from padelscore.auth import roles_required
from padelscore.errors import NotFoundError

bp = Blueprint('players', __name__, url_prefix='/api/players')


@bp.route('', methods=['GET'])
def list_players():
    players = current_app.players.list_players()
    return jsonify({
        'players': [p.to_dict() for p in players],
        'total': len(players)
    })


@bp.route('/<int:player_id>', methods=['GET'])
def get_player(player_id: int):
    player = current_app.players.get_player(player_id)
    if not player:
        raise NotFoundError('Player not found')
    return jsonify({'player': player.to_dict()})


@bp.route('', methods=['POST'])
@roles_required('admin')
def create_player():
    player = current_app.players.create_player(request.get_json(silent=True) or {})
    return jsonify({
        'message': 'Player created successfully',
        'player': player.to_dict()
    }), 201


@bp.route('/<int:player_id>', methods=['PUT'])
@roles_required('admin')
def update_player(player_id: int):
    player = current_app.players.update_player(player_id, request.get_json(silent=True) or {})
    return jsonify({
        'message': 'Player updated successfully',
        'player': player.to_dict()
    })


@bp.route('/<int:player_id>', methods=['DELETE'])
@roles_required('admin')
def delete_player(player_id: int):
    current_app.players.delete_player(player_id)
    return jsonify({'message': 'Player deleted successfully'})
