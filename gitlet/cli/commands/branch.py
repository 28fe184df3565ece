"""Branch command - list, create and delete branches."""

import click

from gitlet.core.errors import GitletError
from gitlet.core.repository import Repository
from gitlet.operations.branch import create_branch, delete_branch, render_branches
from gitlet.cli.output import success, fail


@click.command('branch')
@click.argument('branch_name', required=False)
@click.option('-d', '-D', '--delete', is_flag=True, help='Delete the branch')
def branch_cmd(branch_name, delete):
    """
    List, create, or delete branches.

    Examples:
        gitlet branch               # List branches
        gitlet branch feature       # Create branch 'feature' at HEAD
        gitlet branch -d feature    # Delete branch 'feature'
    """
    if delete and not branch_name:
        fail("Branch name required")

    try:
        repo = Repository.find_repository()

        if delete:
            click.echo(success(delete_branch(repo, branch_name)))
        elif branch_name:
            create_branch(repo, branch_name)
            click.echo(success(f"Created branch '{branch_name}'"))
        else:
            click.echo(render_branches(repo), nl=False)
    except GitletError as e:
        fail(e)
