"""Switch command - switch branches."""

import click

from gitlet.core.errors import GitletError
from gitlet.core.repository import Repository
from gitlet.operations.branch import switch_branch
from gitlet.cli.output import success, fail


@click.command('switch')
@click.option('-c', '--create', is_flag=True, help='Create the branch if it does not exist')
@click.argument('branch_name')
def switch_cmd(create, branch_name):
    """
    Switch to a branch.

    Local changes are carried over; the switch is refused if any of them
    would be overwritten.

    Examples:
        gitlet switch main          # Switch to 'main' branch
        gitlet switch -c hotfix     # Create and switch to 'hotfix' branch
    """
    try:
        repo = Repository.find_repository()
        message = switch_branch(repo, branch_name, create=create)
    except GitletError as e:
        fail(e)

    click.echo(success(message))
