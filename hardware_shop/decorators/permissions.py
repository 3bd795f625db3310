"""
Permission decorators for role-based access control.
Extends the basic require_login decorator with role checks.
"""

from functools import wraps
from flask import g

from hardware_shop.exceptions import ForbiddenError
from hardware_shop.middleware import require_login


def require_role(*allowed_roles):
    """
    Decorator to restrict access to specific roles.

    Usage:
        @require_role('admin')
        @require_role('admin', 'salesperson')

    Args:
        *allowed_roles: Variable number of role strings (admin, salesperson)

    Returns:
        Decorator function
    """
    def decorator(f):
        @wraps(f)
        @require_login
        def decorated_function(*args, **kwargs):
            user_role = g.get('user_role')

            if not user_role or user_role not in allowed_roles:
                if allowed_roles == ('admin',):
                    raise ForbiddenError('Admin access required')
                raise ForbiddenError('Insufficient role for this action')

            return f(*args, **kwargs)

        return decorated_function
    return decorator


def admin_only(f):
    """
    Shortcut decorator for admin-only routes.

    Usage:
        @admin_only
        def create_vendor():
            ...
    """
    return require_role('admin')(f)
