import atexit
import os
from datetime import datetime

import click
from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .auth import login_manager
from .broadcaster import ScoreBroadcaster
from .config import config
from .errors import AppError
from .leaderboard import LeaderboardAggregator
from .match_registry import MatchRegistry
from .models import db
from .player_registry import PlayerRegistry
from .team_registry import TeamRegistry
from .tournament_registry import TournamentRegistry


def create_app(config_name: str = None) -> Flask:
    """Application factory for the PadelScore API."""
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')
    
    app = Flask(__name__)
    app.config.from_object(config[config_name])
    
    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    CORS(
        app,
        resources={r"/api/*": {"origins": app.config['FRONTEND_URL']}},
        methods=['GET', 'POST', 'PUT', 'DELETE'],
        supports_credentials=True
    )
    
    # Initialize services
    broadcaster = ScoreBroadcaster(queue_size=app.config['LIVE_QUEUE_SIZE'])
    atexit.register(broadcaster.close)
    
    # Create tables
    with app.app_context():
        db.create_all()
    
    # Store services on app for access in routes
    app.broadcaster = broadcaster
    app.players = PlayerRegistry()
    app.teams = TeamRegistry()
    app.tournaments = TournamentRegistry()
    app.matches = MatchRegistry(broadcaster)
    app.leaderboard = LeaderboardAggregator()
    
    register_blueprints(app)
    register_health_routes(app)
    register_error_handlers(app)
    register_commands(app)
    
    return app


def register_blueprints(app: Flask):
    from .routes import auth, leaderboard, live, matches, players, teams, tournaments
    
    for module in (auth, players, teams, tournaments, matches, leaderboard, live):
        app.register_blueprint(module.bp)


def register_health_routes(app: Flask):
    
    @app.route('/api/health')
    def health_check():
        """Liveness probe; never touches the database."""
        return jsonify({
            'status': 'ok',
            'message': 'PADELSCORE Backend API is running',
            'timestamp': datetime.utcnow().isoformat() + 'Z'
        })


def register_error_handlers(app: Flask):
    """Every failure leaves as a JSON body with an ``error`` key."""
    
    @app.errorhandler(AppError)
    def handle_app_error(error):
        app.logger.warning(f"{type(error).__name__}: {error.message}")
        return jsonify({'error': error.message}), error.status_code
    
    @app.errorhandler(404)
    def handle_404(error):
        return jsonify({'error': 'Route not found'}), 404
    
    @app.errorhandler(405)
    def handle_405(error):
        return jsonify({'error': 'Method not allowed'}), 405
    
    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'error': error.description}), error.code
    
    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        app.logger.exception(f"Unhandled error: {error}")
        message = str(error) if app.config.get('EXPOSE_ERRORS') else 'Internal server error'
        return jsonify({
            'error': 'Something went wrong!',
            'message': message
        }), 500


def register_commands(app: Flask):
    
    @app.cli.command('seed')
    def seed_command():
        """Load the demo data set (no-op if already loaded)."""
        from .seed import seed_database
        
        if seed_database():
            click.echo('Database seeded.')
        else:
            click.echo('Database already contains data, nothing to do.')
