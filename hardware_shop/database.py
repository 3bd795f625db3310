"""Database configuration and initialization."""
import logging

from flask import current_app
from sqlalchemy import create_engine, text
from sqlalchemy.orm import scoped_session, sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

# Create SQLAlchemy base
Base = declarative_base()


class Database:
    """
    Engine and session registry owned by a single Flask app.

    The instance is stored in ``app.extensions['database']`` so request
    handlers and services receive it from the app instead of a module global.
    """

    def __init__(self, database_uri, echo=False, pool_size=10, max_overflow=20, pool_timeout=30):
        if database_uri.startswith('sqlite'):
            # In-memory SQLite must share one connection across sessions
            self.engine = create_engine(
                database_uri,
                echo=echo,
                connect_args={'check_same_thread': False},
                poolclass=StaticPool
            )
        else:
            self.engine = create_engine(
                database_uri,
                echo=echo,
                pool_pre_ping=True,  # Enable connection health checks
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout
            )

        self.session = scoped_session(
            sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        )

    def create_all(self):
        """Create all tables that do not exist yet."""
        # Import models so they are registered on Base.metadata
        import hardware_shop.models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def ping(self):
        """Return True if the database answers a trivial query."""
        row = self.session.execute(text("SELECT 1 AS health_check")).fetchone()
        return bool(row and row[0] == 1)

    def dispose(self):
        self.session.remove()
        self.engine.dispose()


def init_db(app):
    """Initialize database connection and schema for the app."""
    database = Database(
        app.config['SQLALCHEMY_DATABASE_URI'],
        echo=app.config.get('SQLALCHEMY_ECHO', False),
        pool_size=app.config.get('DB_POOL_SIZE', 10),
        max_overflow=app.config.get('DB_MAX_OVERFLOW', 20),
        pool_timeout=app.config.get('DB_POOL_TIMEOUT', 30)
    )

    # Errors propagate; startup aborts without a schema
    database.create_all()
    logger.info("Database schema ready")

    app.extensions['database'] = database

    # Register teardown
    @app.teardown_appcontext
    def shutdown_session(exception=None):
        """Close database session and rollback on error."""
        if exception:
            database.session.rollback()
        database.session.remove()

    return database


def get_database(app=None):
    """Get the Database bound to the given (or current) app."""
    app = app or current_app
    return app.extensions['database']


def get_session():
    """Get database session for the current app."""
    return get_database().session
