# mantra_tracker/commands.py
import click

from . import db
from .models.user import User


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables."""
        db.create_all()
        click.echo("Database initialized.")

    @app.cli.command("create-user")
    @click.argument("email")
    @click.argument("name")
    @click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
    def create_user(email, name, password):
        """Provision an account (there is no public sign-up)."""
        email = email.strip().lower()
        if len(password) < 6:
            raise click.ClickException("password must be at least 6 characters")

        if User.query.filter_by(email=email).first():
            raise click.ClickException(f"User {email} already exists")

        user = User(email=email, name=name.strip() or email)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        click.echo(f"User {email} created (id={user.id}).")
