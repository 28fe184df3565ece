"""Status command - show working tree status."""

import click

from gitlet.core.errors import GitletError
from gitlet.core.repository import Repository
from gitlet.operations.status import render_status
from gitlet.cli.output import warning, fail


@click.command('status')
def status_cmd():
    """
    Show the working tree status.

    Lists staged files, files staged for removal, tracked files modified
    or deleted without being staged, and untracked files.
    """
    try:
        repo = Repository.find_repository()
        report = render_status(repo)
        merge_head = repo.merge.get_merge_head()
    except GitletError as e:
        fail(e)

    click.echo(report, nl=False)
    if merge_head:
        click.echo(warning(f"Merging {merge_head[:7]}: fix conflicts, add the files and commit"))
