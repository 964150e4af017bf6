# seeds/__init__.py

import click

from .access import seed_access
from .genders import seed_genders
from .geo import seed_geo


def register_commands(app):
    """Attach the seed commands to the Flask CLI (flask --app app <command>)."""

    @app.cli.command("seed-permissions")
    def seed_permissions_command():
        """Reset permissions, base roles and the admin user."""
        admin_code = seed_access(app.config)
        click.echo(f"Permissions, roles and admin user seeded ({admin_code}).")

    @app.cli.command("seed-genders")
    def seed_genders_command():
        """Reset the gender list."""
        seed_genders()
        click.echo("Genders seeded.")

    @app.cli.command("seed-geo")
    @click.argument("path", type=click.Path(exists=True, dir_okay=False))
    def seed_geo_command(path):
        """Reset countries, states and cities from a JSON file."""
        countries, states, cities = seed_geo(path)
        click.echo(f"Seeded {countries} countries, {states} states and {cities} cities.")


__all__ = ["register_commands", "seed_access", "seed_genders", "seed_geo"]
