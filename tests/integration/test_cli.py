"""
Integration tests for the flask CLI commands.
"""

from hardware_shop.database import get_database
from hardware_shop.models import AppUser
from hardware_shop.services.auth_service import authenticate


def _user(app, username):
    with app.app_context():
        return get_database(app).session.query(AppUser).filter_by(username=username).first()


def test_init_db_is_idempotent(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=['init-db'])

    assert result.exit_code == 0, result.output
    assert 'Database schema is up to date.' in result.output
    # Default users already exist from app startup
    assert 'No default users seeded' in result.output
    assert _user(app, 'admin') is not None


def test_create_user_then_login(app, client):
    runner = app.test_cli_runner()

    result = runner.invoke(args=[
        'create-user', '--username', ' clerk ', '--role', 'salesperson', '--password', 'counter-pass'
    ])

    assert result.exit_code == 0, result.output
    assert "User 'clerk' saved with role salesperson." in result.output

    with app.app_context():
        user = authenticate(get_database(app).session, 'clerk', 'counter-pass')
        assert user is not None
        assert user.role == 'salesperson'

    response = client.post('/login', json={'username': 'clerk', 'password': 'counter-pass'})
    assert response.status_code == 200
    assert response.get_json()['role'] == 'salesperson'


def test_create_user_resets_existing_account(app, client):
    runner = app.test_cli_runner()

    result = runner.invoke(args=[
        'create-user', '--username', 'sales', '--role', 'admin', '--password', 'promoted-pass'
    ])
    assert result.exit_code == 0, result.output

    old = client.post('/login', json={'username': 'sales', 'password': app.config['SALES_PASSWORD']})
    new = client.post('/login', json={'username': 'sales', 'password': 'promoted-pass'})

    assert old.status_code == 401
    assert new.get_json()['role'] == 'admin'


def test_create_user_rejects_short_password(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=[
        'create-user', '--username', 'temp', '--password', 'abc'
    ])

    assert 'Password must be at least 6 characters.' in result.output
    assert _user(app, 'temp') is None


def test_create_user_rejects_unknown_role(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=[
        'create-user', '--username', 'temp', '--role', 'owner', '--password', 'long-enough'
    ])

    assert result.exit_code != 0
    assert _user(app, 'temp') is None
