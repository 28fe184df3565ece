"""Operations module for high-level Gitlet operations.

This module contains the business logic for Gitlet operations like:
- Checkout (working tree synchronization)
- Merge algorithms
- Status computation
- Committing and log rendering
- Branch management
"""

from gitlet.operations.checkout import WorkingTreeSync, CheckoutResult
from gitlet.operations.merge import MergeEngine, MergeResult

__all__ = [
    'WorkingTreeSync', 'CheckoutResult',
    'MergeEngine', 'MergeResult',
]
