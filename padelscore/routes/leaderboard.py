from flask import Blueprint, current_app, jsonify

bp = Blueprint('leaderboard', __name__, url_prefix='/api/leaderboard')


@bp.route('/<int:tournament_id>', methods=['GET'])
def get_leaderboard(tournament_id: int):
    """Ranked standings of a tournament."""
    return jsonify(current_app.leaderboard.build(tournament_id).to_dict())
