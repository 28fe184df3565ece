"""Unstage command - drop staged changes for a file."""

import click

from gitlet.core.errors import GitletError
from gitlet.core.repository import Repository
from gitlet.cli.output import success, fail


@click.command('unstage')
@click.argument('paths', nargs=-1, required=True)
def unstage_cmd(paths):
    """
    Remove files from the staging area.

    Both staged additions and staged removals are forgotten. The working
    tree is not touched.
    """
    try:
        repo = Repository.find_repository()
        index = repo.load_index()

        for path in paths:
            rel_path = repo.relative_path(path)
            index.unstage(rel_path)
            click.echo(success(f"Unstaged '{rel_path}'"))
    except GitletError as e:
        fail(e)
