"""Add command - stage files for commit."""

import click

from gitlet.core.errors import GitletError
from gitlet.core.repository import Repository
from gitlet.cli.output import success, info, warning, fail

CONFLICT_MARKERS = (b'<<<<<<< HEAD', b'>>>>>>> ')


def has_conflict_markers(file_path) -> bool:
    """Check if a file still contains conflict markers."""
    content = file_path.read_bytes()
    return all(marker in content for marker in CONFLICT_MARKERS)


@click.command('add')
@click.argument('paths', nargs=-1, required=True)
def add_cmd(paths):
    """
    Add file contents to the staging area.

    Stage files for the next commit. Modified files must be added
    again to stage the new changes.

    During a merge with conflicts, adding a file marks it as resolved.

    Examples:
        gitlet add file.txt
        gitlet add src/main.py docs/notes.txt
    """
    try:
        repo = Repository.find_repository()
        index = repo.load_index()
        merge_in_progress = repo.merge.is_merge_in_progress()

        for path in paths:
            rel_path = repo.relative_path(path)
            index.stage(rel_path)
            click.echo(info(f"  {rel_path}"))

            if merge_in_progress and has_conflict_markers(repo.absolute_path(rel_path)):
                click.echo(warning(f"{rel_path} still contains conflict markers"))
    except GitletError as e:
        fail(e)

    click.echo(success(f"Added {len(paths)} file(s) to staging area"))
