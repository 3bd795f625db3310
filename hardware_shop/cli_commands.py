"""
Flask CLI commands for database and account management.

Commands:
- flask init-db: Create tables and seed the configured default accounts
- flask create-user: Create a user or reset its password/role
"""

import click
from flask import current_app

from hardware_shop.database import get_database
from hardware_shop.models import UserRole
from hardware_shop.services.auth_service import create_or_update_user, seed_default_users


def init_cli_commands(app):
    """Register CLI commands with Flask app."""

    @app.cli.command('init-db')
    def init_db_command():
        """Create missing tables and seed default users."""
        database = get_database()
        database.create_all()

        seeded = seed_default_users(database.session, current_app.config)
        click.echo(click.style('Database schema is up to date.', fg='green'))
        if seeded:
            click.echo(f"Seeded users: {', '.join(seeded)}")
        else:
            click.echo('No default users seeded (set ADMIN_PASSWORD / SALES_PASSWORD to seed).')

    @app.cli.command('create-user')
    @click.option('--username', prompt=True, help='Login name')
    @click.option('--role', type=click.Choice([r.value for r in UserRole]), default=UserRole.SALESPERSON.value,
                  show_default=True, help='Access role')
    @click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True, help='Password')
    def create_user(username, role, password):
        """Create a user, or reset the password and role of an existing one."""
        username = username.strip()
        if not username:
            click.echo(click.style('Username is required.', fg='red'))
            return

        if len(password) < 6:
            click.echo(click.style('Password must be at least 6 characters.', fg='red'))
            return

        session = get_database().session
        try:
            user = create_or_update_user(session, username, password, role)
        except ValueError as e:
            click.echo(click.style(f'Error: {e}', fg='red'))
            return

        click.echo(click.style(f"User '{user.username}' saved with role {user.role}.", fg='green', bold=True))
