# Overview: Flask CLI command group for storage bootstrap, inspection and backups.

# backend/vendorhub/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Choose a backend with STORE_BACKEND=memory|file|sql.
# - Use: python -m flask data <command> [options]
#
# - python -m flask data init-db
#   Create tables (sql) or the data file (file). Idempotent.
# - python -m flask data check-db
#   Verify the store is reachable and print row counts. Exits 1 on failure.
# - python -m flask data seed
#   Load sample vendors, brands and issues into an empty store.
# - python -m flask data backup --output backups/today.json
#   Write the same document GET /api/backup serves.

import json
import sys

import click
from flask import current_app
from flask.cli import with_appcontext

from .services import data_service
from .stores import get_store
from .validation import StorageError


@click.group('data')
def data_group():
    """Record store bootstrap and maintenance commands."""


@data_group.command('init-db')
@with_appcontext
def init_db():
    """Create the schema for the configured store."""
    store = get_store()
    store.init_schema()
    click.echo(f"Initialized {store.name} store")


@data_group.command('check-db')
@with_appcontext
def check_db():
    """Verify connectivity and print row counts."""
    store = get_store()
    try:
        info = store.check_connection()
        counts = data_service.row_counts(store)
    except StorageError as e:
        click.echo(f"Connection test failed: {e}", err=True)
        sys.exit(1)

    for key, value in info.items():
        click.echo(f"{key}: {value}")
    for key, value in counts.items():
        click.echo(f"  {key:<12} {value}")


@data_group.command('seed')
@with_appcontext
def seed():
    """Load demo vendors, brands and issues if the store is empty."""
    if data_service.seed_demo_data(get_store()):
        click.echo("Seeded demo data")
    else:
        click.echo("Store already has vendors; nothing seeded")


@data_group.command('backup')
@click.option('--output', 'output', type=click.Path(dir_okay=False, writable=True),
              help='File to write (default: backup_<date>.json)')
@with_appcontext
def backup(output):
    """Write a full snapshot to disk."""
    path = output or data_service.backup_filename()
    document = data_service.build_backup(get_store())
    with open(path, "w", encoding="utf-8") as f:
        json.dump(document, f, indent=2)
    current_app.logger.info("Backup written to %s", path)
    click.echo(f"Backup written to {path}")


def register_commands(app):
    app.cli.add_command(data_group)
