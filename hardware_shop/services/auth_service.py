"""
Authentication service.

Handles credential checks against stored password hashes, API token
issuance/verification and seeding of the default accounts.
"""
import logging
from datetime import datetime, timedelta, timezone

import jwt
from sqlalchemy.exc import IntegrityError

from hardware_shop.models import AppUser, UserRole

logger = logging.getLogger(__name__)


def authenticate(session, username, password):
    """
    Return the active user matching the credentials, or None.

    Password verification uses werkzeug's constant-time hash comparison.
    """
    if not username or not password:
        return None

    user = session.query(AppUser).filter_by(username=username).first()
    if not user or not user.active:
        logger.warning(f"Login failed for unknown or inactive user: {username}")
        return None

    if not user.check_password(password):
        logger.warning(f"Login failed (bad password) for user: {username}")
        return None

    return user


def issue_token(user, secret_key, hours=8, algorithm='HS256'):
    """
    Issue a signed token embedding the user's name and role.

    Returns:
        str: encoded JWT
    """
    now = datetime.now(timezone.utc)
    payload = {
        'username': user.username,
        'role': user.role,
        'iat': now,
        'exp': now + timedelta(hours=hours),
    }
    return jwt.encode(payload, secret_key, algorithm=algorithm)


def decode_token(token, secret_key, algorithm='HS256'):
    """
    Decode and verify a token.

    Raises:
        jwt.ExpiredSignatureError: token expired
        jwt.InvalidTokenError: bad signature or malformed token
    """
    payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    if 'username' not in payload or 'role' not in payload:
        raise jwt.InvalidTokenError('Token payload is missing username or role')
    return payload


def create_or_update_user(session, username, password, role):
    """Create a user, or reset the password and role of an existing one."""
    if role not in {r.value for r in UserRole}:
        raise ValueError(f"Invalid role: {role}")

    user = session.query(AppUser).filter_by(username=username).first()
    created = user is None
    if created:
        user = AppUser(username=username)
        session.add(user)

    user.role = role
    user.active = True
    user.set_password(password)

    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise ValueError(f"User {username} already exists")

    logger.info(f"{'Created' if created else 'Updated'} user '{username}' with role {role}")
    return user


def seed_default_users(session, config):
    """
    Create the admin and salesperson accounts when their passwords are configured.

    Existing accounts are left untouched.
    """
    defaults = (
        (config.get('ADMIN_USERNAME', 'admin'), config.get('ADMIN_PASSWORD'), UserRole.ADMIN.value),
        (config.get('SALES_USERNAME', 'sales'), config.get('SALES_PASSWORD'), UserRole.SALESPERSON.value),
    )

    seeded = []
    for username, password, role in defaults:
        if not password:
            continue
        if session.query(AppUser.id).filter_by(username=username).first():
            continue
        create_or_update_user(session, username, password, role)
        seeded.append(username)

    return seeded
