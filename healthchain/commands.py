import json
import click
from flask.cli import with_appcontext
from healthchain.extensions import db
from healthchain.services import get_healthchain


@click.command('init-db')
@with_appcontext
def init_db_command():
    """Create the ledger table."""
    from healthchain.models import ledger_models  # noqa: F401
    db.create_all()
    click.echo("Ledger database initialized successfully!")


@click.command('show-ledger')
@click.option('--type', 'entry_type', default=None, help='Only show entries of this type, e.g. CONSENT_GRANTED.')
@with_appcontext
def show_ledger_command(entry_type):
    """Replay the durable ledger, one JSON entry per line."""
    entries = get_healthchain().read_ledger(entry_type)
    for entry in entries:
        click.echo(json.dumps(entry.to_dict()))
    click.echo(f"{len(entries)} ledger entries", err=True)


def register_commands(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(show_ledger_command)
