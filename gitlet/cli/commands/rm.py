"""Rm command - stage files for removal."""

import click

from gitlet.core.errors import GitletError
from gitlet.core.repository import Repository
from gitlet.cli.output import success, fail


@click.command('rm')
@click.argument('paths', nargs=-1, required=True)
@click.option('--cached', is_flag=True, help='Only untrack the file; keep it in the working tree')
def rm_cmd(paths, cached):
    """
    Remove files from the working tree and stage their removal.

    A file with changes staged for addition is not deleted; unstage it
    first or use --cached.

    Examples:
        gitlet rm old.txt
        gitlet rm --cached secrets.txt
    """
    try:
        repo = Repository.find_repository()
        index = repo.load_index()

        for path in paths:
            rel_path = repo.relative_path(path)
            index.remove(rel_path, cached=cached)
            click.echo(success(f"rm '{rel_path}'"))
    except GitletError as e:
        fail(e)
