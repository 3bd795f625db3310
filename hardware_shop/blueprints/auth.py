"""Authentication blueprint: exchanges credentials for an API token."""
from flask import Blueprint, jsonify, current_app

from hardware_shop.database import get_session
from hardware_shop.exceptions import ValidationError, ShopError
from hardware_shop.services.auth_service import authenticate, issue_token
from hardware_shop.utils.http import get_json_body

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/login', methods=['POST'])
def login():
    """Validate username/password and return a signed token with the user's role."""
    data = get_json_body()
    username = data.get('username')
    password = data.get('password')

    if not username or not password:
        raise ValidationError('Username and password required')

    user = authenticate(get_session(), str(username).strip(), str(password))
    if not user:
        raise ShopError('Invalid credentials', status_code=401)

    token = issue_token(
        user,
        current_app.config['JWT_SECRET'],
        hours=current_app.config.get('JWT_EXPIRATION_HOURS', 8),
        algorithm=current_app.config.get('JWT_ALGORITHM', 'HS256')
    )
    current_app.logger.info(f"User '{user.username}' logged in as {user.role}")

    return jsonify({
        'token': token,
        'role': user.role,
        'message': f'Login successful as {user.role}'
    })
