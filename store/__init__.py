"""
In-memory store module for the quiz system.
Holds quotes, submissions and the per-day action locks.
"""

from .models import (
    Quote,
    Submission,
    RankingItem,
    build_submission_input_model,
    format_validation_issues,
)
from .quote_catalog import QuoteCatalog
from .lock_registry import LockKey, LockRegistry
from .submission_store import SubmissionStore, generate_submission_id

__all__ = [
    'Quote',
    'Submission',
    'RankingItem',
    'build_submission_input_model',
    'format_validation_issues',
    'QuoteCatalog',
    'LockKey',
    'LockRegistry',
    'SubmissionStore',
    'generate_submission_id',
]
