import click
from flask import Flask

from .extensions import db
from .models.application_password import ApplicationPassword, generate_app_password
from .models.field import FieldDefinition
from .models.user import ROLE_CAPABILITIES, User


def register_commands(app: Flask) -> None:
    @app.cli.command("init-db")
    def init_db():
        """Create all tables."""
        db.create_all()
        click.echo("Database tables created.")

    @app.cli.command("create-user")
    @click.argument("username")
    @click.argument("email")
    @click.option("--role", type=click.Choice(sorted(ROLE_CAPABILITIES)), default="editor")
    def create_user(username, email, role):
        """Create a user that application passwords can be issued for."""
        if User.query.filter((User.username == username) | (User.email == email)).first():
            raise click.ClickException("A user with this username or email already exists")

        user = User()
        user.username = username
        user.email = email
        user.role = role
        db.session.add(user)
        db.session.commit()
        click.echo(f"Created {role} {username} ({user.id})")

    @app.cli.command("create-app-password")
    @click.argument("username")
    @click.option("--name", default="MetriFi", help="Label shown for this password.")
    def create_app_password(username, name):
        """Issue an application password; it is printed once and never stored in clear."""
        user = User.query.filter_by(username=username).first()
        if not user:
            raise click.ClickException(f"Unknown user {username}")

        password = generate_app_password()
        app_password = ApplicationPassword()
        app_password.user_id = user.id
        app_password.name = name
        app_password.set_password(password)
        db.session.add(app_password)
        db.session.commit()
        click.echo(password)

    @app.cli.command("register-field")
    @click.argument("name")
    @click.argument("key")
    @click.option("--label", default="")
    @click.option("--type", "field_type", default="flexible_content")
    def register_field(name, key, label, field_type):
        """Register or re-key a named custom field."""
        definition = FieldDefinition.query.filter_by(name=name).first() or FieldDefinition()
        definition.name = name
        definition.key = key
        definition.label = label or name.replace("_", " ").title()
        definition.type = field_type
        db.session.add(definition)
        db.session.commit()
        click.echo(f"Field {name} -> {key}")
