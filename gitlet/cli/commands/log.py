"""Log command - show commit history."""

import click

from gitlet.core.errors import GitletError
from gitlet.core.repository import Repository
from gitlet.operations.history import render_log
from gitlet.cli.output import fail


@click.command('log')
def log_cmd():
    """Show the commit history of HEAD, most recent first."""
    try:
        repo = Repository.find_repository()
        output = render_log(repo)
    except GitletError as e:
        fail(e)

    click.echo(output, nl=False)
