"""Core functionality for Gitlet.

This module contains the core data structures:
- Gitlet objects (Blob, Commit) and the blob store
- Commit graph and history traversal
- Repository management
- Index/staging area
- Reference management
- Configuration management
- Hashing utilities

For operations like checkout, merge and status, see gitlet.operations
"""

from gitlet.core.objects import Blob, Commit
from gitlet.core.repository import Repository
from gitlet.core.hash import hash_object, hash_file
from gitlet.core.store import ObjectStore
from gitlet.core.commits import CommitGraph, CommitIterator
from gitlet.core.index import Index
from gitlet.core.refs import RefStore
from gitlet.core.config import Config, get_config

__all__ = [
    'Blob',
    'Commit',
    'Repository',
    'ObjectStore',
    'CommitGraph',
    'CommitIterator',
    'Index',
    'RefStore',
    'Config',
    'get_config',
    'hash_object',
    'hash_file',
]
