import click
from flask.cli import with_appcontext

from healthtracker.app import init_db
from healthtracker.tracker import HealthTracker
from healthtracker.validation import EXPORT_HEADER


def register_commands(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(export_records_command)


@click.command('init-db')
@with_appcontext
def init_db_command():
    """Create the database tables."""
    init_db()
    click.echo('Initialized the database.')


@click.command('export-records')
@with_appcontext
@click.argument('username')
@click.option('--password', prompt=True, hide_input=True)
@click.option('--output', '-o', type=click.File('w', encoding='utf-8'), default='-',
              help='File to write to, stdout by default.')
def export_records_command(username, password, output):
    """Write every health record of USERNAME as CSV lines."""
    tracker = HealthTracker()
    if not tracker.login(username, password):
        raise click.ClickException('Invalid username or password')

    lines = tracker.export_records()
    output.write(EXPORT_HEADER + '\n')
    for line in lines:
        output.write(line + '\n')
    tracker.logout()

    if output.name != '<stdout>':
        click.echo(f'Exported {len(lines)} record(s) to {output.name}', err=True)
