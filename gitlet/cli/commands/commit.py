"""Commit command - create a commit from staged changes."""

import click

from gitlet.core.errors import GitletError
from gitlet.core.repository import Repository
from gitlet.operations.history import commit_changes
from gitlet.cli.output import success, fail


@click.command('commit')
@click.argument('message', required=False)
@click.option('-m', '--message', 'message_opt', help='Commit message')
def commit_cmd(message, message_opt):
    """
    Record the staged changes in a new commit.

    Examples:
        gitlet commit "Add parser"
        gitlet commit -m "Fix typo"
    """
    message = message_opt or message
    if not message:
        fail("Please enter a commit message.")

    try:
        repo = Repository.find_repository()
        commit = commit_changes(repo, message)
        branch = repo.refs.get_current_branch()
    except GitletError as e:
        fail(e)

    merge_info = " (merge)" if commit.is_merge else ""
    click.echo(success(f"[{branch} {commit.hash[:7]}]{merge_info} {commit.message}"))
