"""Branch management and switching for Gitlet."""

import logging

from gitlet.core.errors import BranchNotFound

logger = logging.getLogger(__name__)


def create_branch(repo, branch_name: str) -> str:
    """
    Create a branch pointing at the HEAD commit.

    Returns:
        The commit hash the new branch points at ('' before the first commit)
    """
    head_hash = repo.refs.head_hash()
    repo.refs.create_branch(branch_name, head_hash)
    logger.debug("Created branch %s at %s", branch_name, head_hash or '(empty)')
    return head_hash


def delete_branch(repo, branch_name: str) -> str:
    """Delete a branch that is not checked out and return the confirmation line."""
    repo.refs.delete_branch(branch_name)
    return f"Deleted branch '{branch_name}'"


def render_branches(repo) -> str:
    """
    List branches sorted by name, marking the checked-out one.

    Example:
        * main
          dev
    """
    current = repo.refs.get_current_branch()
    lines = []
    for name, _ in repo.refs.list_branches():
        prefix = '* ' if name == current else '  '
        lines.append(f"{prefix}{name}")
    return '\n'.join(lines) + '\n' if lines else ''


def switch_branch(repo, branch_name: str, create: bool = False) -> str:
    """
    Check out a branch, optionally creating it first.

    Switching to an existing branch with create set simply checks it out.
    The working tree is synchronized before HEAD moves, so a refused
    checkout leaves HEAD where it was.

    Args:
        repo: Repository instance
        branch_name: Branch to switch to
        create: Create the branch at HEAD if it does not exist

    Returns:
        The message to report

    Raises:
        BranchNotFound: If the branch does not exist and create is not set
        CheckoutConflict: If local changes would be overwritten
    """
    if branch_name == repo.refs.get_current_branch():
        return f"Already on '{branch_name}'"

    if not repo.refs.branch_exists(branch_name):
        if not create:
            raise BranchNotFound(branch_name)
        create_branch(repo, branch_name)

    target_hash = repo.refs.read_ref(branch_name)
    repo.checkout.checkout(target_hash)
    repo.refs.set_head(branch_name)

    return f"Switched to branch '{branch_name}'"
