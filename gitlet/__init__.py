"""Gitlet - A small single-user version control system implemented in Python."""

__version__ = '0.1.0'

from gitlet.core.repository import Repository
from gitlet.core.objects import Blob, Commit

__all__ = [
    'Repository',
    'Blob',
    'Commit',
]
