"""Merge command for Gitlet."""

import click

from gitlet.core.errors import GitletError
from gitlet.core.repository import Repository
from gitlet.cli.output import success, info, warning, fail


@click.command('merge')
@click.argument('branch', required=False)
@click.option('--abort', is_flag=True, help='Abort the current merge operation')
def merge_cmd(branch, abort):
    """
    Merge a branch into the current branch.

    BRANCH is the name of the branch to merge into the current branch.
    Conflicting files are written with conflict markers and left staged;
    resolve them, add them and commit to finish the merge.

    Examples:
        gitlet merge feature        # Merge feature branch into current branch
        gitlet merge --abort        # Abort current merge (if conflicts exist)
    """
    try:
        repo = Repository.find_repository()

        if abort:
            if not repo.merge.abort_merge():
                fail("No merge in progress")
            click.echo(success("Merge aborted"))
            return

        if not branch:
            fail("Missing branch name")

        result = repo.merge.merge(branch)
    except GitletError as e:
        fail(e)

    if result.conflicts:
        for path in result.conflicts:
            click.echo(warning(f"CONFLICT (content): Merge conflict in {path}"))
        click.echo(warning(result.message))
        click.echo(info("Fix conflicts, add the files and commit, or run 'gitlet merge --abort'"))
    elif result.up_to_date:
        click.echo(info(result.message))
    else:
        click.echo(success(result.message))
