"""Initialize a new Gitlet repository."""

import click

from gitlet.core.errors import GitletError
from gitlet.core.repository import Repository
from gitlet.cli.output import success, fail


@click.command('init')
@click.argument('path', default='.')
def init_cmd(path):
    """
    Initialize a new Gitlet repository.

    Creates a .gitlet directory with the necessary structure for version
    control. PATH is created if it does not exist.

    Examples:
        gitlet init                 # Initialize in current directory
        gitlet init my-project      # Initialize in my-project directory
    """
    try:
        repo = Repository(path).init()
    except GitletError as e:
        fail(e)

    click.echo(success(f"Initialized empty Gitlet repository in {repo.gitlet_dir}"))
