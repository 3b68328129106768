import click
from flask.cli import with_appcontext

from models import db
from models.users import User


@click.command("create-db")
@with_appcontext
def create_db():
    """Create all database tables."""
    db.create_all()
    click.echo("Database tables created.")


@click.command("reset-password")
@click.argument("username")
@click.argument("password")
@with_appcontext
def reset_password(username, password):
    """Set a new password for USERNAME."""
    user = User.query.filter_by(username=username).first()
    if not user:
        raise click.ClickException("User not found!")

    user.set_password(password)
    db.session.commit()
    click.echo("Password updated successfully!")


def register_commands(app):
    app.cli.add_command(create_db)
    app.cli.add_command(reset_password)
