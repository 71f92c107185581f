"""This module defines the 'db' command group."""

import click
from pocket_ledger.providers.database import DatabaseManager
from pocket_ledger.repositories.schema import create_schema
from sqlalchemy.exc import SQLAlchemyError


@click.group("db")
def db_group() -> None:
    """Groups commands related to database management."""
    pass


@db_group.command("init")
def init() -> None:
    """Creates the ledger tables that do not exist yet."""
    click.echo("Creating ledger tables...")
    try:
        create_schema(DatabaseManager.get_engine())
        click.secho("Ledger tables are ready!", fg="green")
    except SQLAlchemyError as e:
        click.secho(f"An error occurred while creating the tables: {e}", fg="red")
        raise click.Abort()
    finally:
        DatabaseManager.release_engine()
