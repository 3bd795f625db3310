"""Reports blueprint: profit and revenue rollups (admin only)."""
from flask import Blueprint, jsonify, request, current_app

from hardware_shop.database import get_session
from hardware_shop.decorators.permissions import admin_only
from hardware_shop.services.report_service import get_report

reports_bp = Blueprint('reports', __name__, url_prefix='/reports')


@reports_bp.route('', methods=['GET'])
@admin_only
def report():
    """Return the report selected by ``?type=`` (defaults to summary)."""
    days = current_app.config.get('DAILY_REPORT_DAYS', 30)
    return jsonify(get_report(get_session(), request.args.get('type'), days=days))


@reports_bp.route('/<report_type>', methods=['GET'])
@admin_only
def report_by_path(report_type):
    """Same reports addressed by path, e.g. ``/reports/product-profit``."""
    days = current_app.config.get('DAILY_REPORT_DAYS', 30)
    return jsonify(get_report(get_session(), report_type, days=days))
