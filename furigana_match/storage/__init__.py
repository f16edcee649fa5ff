"""
Best-effort persistence for win counts and the review list.
"""

from .store import KeyValueStore, MemoryStore, JsonFileStore
from .progress_store import ProgressStore, PROGRESS_KEY, REVIEW_KEY

__all__ = [
    'KeyValueStore',
    'MemoryStore',
    'JsonFileStore',
    'ProgressStore',
    'PROGRESS_KEY',
    'REVIEW_KEY'
]
