from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user
from sqlalchemy import or_

from padelscore.auth import issue_token
from padelscore.errors import UnauthorizedError, ValidationError
from padelscore.models import User

bp = Blueprint('auth', __name__, url_prefix='/api/auth')


@bp.route('/login', methods=['POST'])
def login():
    """Exchange username (or email) and password for a bearer token."""
    data = request.get_json(silent=True) or {}
    username = data.get('username')
    password = data.get('password')
    
    if not username or not password:
        raise ValidationError('Username and password are required')
    
    user = User.query.filter(or_(User.username == username, User.email == username)).first()
    if user is None or not user.check_password(password):
        current_app.logger.warning(f"Failed login for {username}")
        raise UnauthorizedError('Invalid credentials')
    
    return jsonify({
        'message': 'Login successful',
        'token': issue_token(user),
        'user': user.to_dict()
    })


@bp.route('/me', methods=['GET'])
def me():
    if not current_user.is_authenticated:
        raise UnauthorizedError('Access token required')
    return jsonify({'user': current_user.to_dict()})
