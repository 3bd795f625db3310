"""Main blueprint with health check endpoints."""
from flask import Blueprint, jsonify, current_app
from hardware_shop.database import get_database

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    """Service banner."""
    return jsonify({'service': 'hardware-shop', 'status': 'ok'})


@main_bp.route('/health')
def health():
    """
    Health check endpoint that validates database connection.

    Returns:
        200: Healthy (DB connected)
        503: Unhealthy (DB error)
    """
    try:
        if get_database().ping():
            return jsonify({'status': 'healthy', 'database': 'connected'}), 200

        return jsonify({'status': 'unhealthy', 'database': 'error'}), 503

    except Exception as e:
        current_app.logger.error(f"Health check failed: {e}")
        return jsonify({'status': 'unhealthy', 'database': 'disconnected'}), 503
