"""
Data management infrastructure for practice progress.
"""

from .records import SessionRecord, ProgressSummary, ProgressFile
from .progress import JsonProgressStore, weighted_overall

__all__ = [
    'SessionRecord',
    'ProgressSummary',
    'ProgressFile',
    'JsonProgressStore',
    'weighted_overall',
]
