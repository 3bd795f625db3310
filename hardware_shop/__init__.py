"""Flask application factory."""
import logging
import traceback

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import DEFAULT_SECRET_KEY
from hardware_shop.database import init_db


def create_app(config_object='config.Config'):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.json.sort_keys = False

    app.logger.setLevel(getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    # Tokens signed with the shared development secret are forgeable
    jwt_secret = app.config.get('JWT_SECRET')
    if not jwt_secret or jwt_secret == DEFAULT_SECRET_KEY:
        if app.config.get('ENV') == 'production':
            raise RuntimeError('JWT_SECRET or SECRET_KEY must be set in production')
        app.logger.warning('Using the development token secret; set JWT_SECRET before deploying')

    # Sentry error tracking in production
    if app.config.get('SENTRY_DSN') and app.config.get('ENV') == 'production':
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration

        sentry_sdk.init(
            dsn=app.config['SENTRY_DSN'],
            integrations=[FlaskIntegration()],
            traces_sample_rate=0.1,
            environment=app.config.get('ENV', 'production')
        )

    # Prometheus metrics instrumentation
    from hardware_shop.blueprints.metrics import setup_metrics_instrumentation
    setup_metrics_instrumentation(app)

    # Initialize database; raises if the schema cannot be created
    database = init_db(app)

    from hardware_shop.services.auth_service import seed_default_users
    seeded = seed_default_users(database.session, app.config)
    if seeded:
        app.logger.info(f"Seeded default users: {', '.join(seeded)}")
    database.session.remove()

    # Token context and CORS for every request
    from hardware_shop.middleware import load_user_from_token, add_cors_headers

    @app.before_request
    def before_request_handler():
        """Load the token's user for each request."""
        load_user_from_token()

    app.after_request(add_cors_headers)

    # Error Handlers
    from hardware_shop.exceptions import ShopError

    @app.errorhandler(ShopError)
    def handle_shop_error(error):
        """Handle custom application exceptions."""
        app.logger.warning(f"ShopError [{error.status_code}]: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'status': 'error', 'error': error.name}), error.code

    @app.errorhandler(Exception)
    def internal_error(error):
        app.logger.error(f"Unhandled Exception: {error}")
        app.logger.error(f"Traceback: {traceback.format_exc()}")
        database.session.rollback()
        return jsonify({'status': 'error', 'error': 'Internal Server Error'}), 500

    # Register blueprints
    from hardware_shop.blueprints.main import main_bp
    from hardware_shop.blueprints.metrics import metrics_bp
    from hardware_shop.blueprints.auth import auth_bp
    from hardware_shop.blueprints.vendors import vendors_bp
    from hardware_shop.blueprints.products import products_bp
    from hardware_shop.blueprints.sales import sales_bp
    from hardware_shop.blueprints.reports import reports_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(metrics_bp)

    # API routes are served both at the root and under /api
    for bp in (auth_bp, vendors_bp, products_bp, sales_bp, reports_bp):
        app.register_blueprint(bp)
        app.register_blueprint(
            bp,
            url_prefix='/api' + (bp.url_prefix or ''),
            name=f'api_{bp.name}'
        )

    # Register CLI commands
    from hardware_shop.cli_commands import init_cli_commands
    init_cli_commands(app)

    return app
