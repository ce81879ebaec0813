# hypertrophy/db.py
from __future__ import annotations
import sqlite3
from pathlib import Path

import click
from flask import Flask, current_app, g
from flask.cli import with_appcontext

SCHEMA = """
CREATE TABLE IF NOT EXISTS local_storage (
    key   TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


def get_db() -> sqlite3.Connection:
    """
    Returns a cached SQLite connection bound to the current app context.
    Row factory = dict-ähnliche Zugriffe via Spaltennamen.
    """
    if "db" not in g:
        db_path = current_app.config.get("DATABASE")
        if not db_path:
            db_path = str(Path(current_app.instance_path) / "hypertrophy.db")
        g.db = sqlite3.connect(db_path)
        g.db.row_factory = sqlite3.Row
    return g.db


def close_db(_: BaseException | None = None) -> None:
    """Closes the connection at the end of the request (if present)."""
    db = g.pop("db", None)
    if db is not None:
        db.close()


def init_db() -> None:
    """Erzeugt die Key-Value-Tabelle, falls sie nicht existiert."""
    db = get_db()
    db.executescript(SCHEMA)
    db.commit()


@click.command("init-db")
@with_appcontext
def init_db_command() -> None:
    """Legt den lokalen Speicher an (idempotent)."""
    init_db()
    click.echo(f"Lokaler Speicher initialisiert: {current_app.config['DATABASE']}")


def init_app(app: Flask) -> None:
    app.cli.add_command(init_db_command)
    with app.app_context():
        init_db()
