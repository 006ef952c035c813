"""
Unit tests for bearer tokens.
"""
from itsdangerous import URLSafeTimedSerializer

from padelscore.auth import TOKEN_SALT, issue_token, resolve_token


class TestTokens:
    
    def test_round_trip(self, app, referee):
        with app.app_context():
            user = resolve_token(issue_token(referee))
            
            assert user.id == referee.id
            assert user.role == 'referee'
    
    def test_tampered(self, app, referee):
        with app.app_context():
            token = issue_token(referee)
            assert resolve_token(token[:-2] + 'xx') is None
    
    def test_wrong_key(self, app, referee):
        forged = URLSafeTimedSerializer('not-the-key', salt=TOKEN_SALT).dumps({'uid': referee.id})
        
        with app.app_context():
            assert resolve_token(forged) is None
    
    def test_unknown_user(self, app, db_session):
        with app.app_context():
            forged = URLSafeTimedSerializer(app.config['SECRET_KEY'], salt=TOKEN_SALT)
            assert resolve_token(forged.dumps({'uid': 404})) is None
            assert resolve_token(forged.dumps(['not', 'a', 'dict'])) is None
