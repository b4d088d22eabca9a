"""
Datastore module with abstraction layer.

This module provides:
- UrlDatastore interface: Abstract base class for datastore implementations
- InMemoryUrlDatastore: Thread-safe in-memory implementation (default)
- SnapshotModel: JSON snapshot format used for export and import

To add a new datastore backend:
1. Create a new class inheriting from UrlDatastore
2. Implement all abstract methods
3. Pass an instance to URLShorteningService
"""

from shortener.db.interface import UrlDatastore
from shortener.db.memory_store import InMemoryUrlDatastore
from shortener.db.snapshot import SnapshotModel

__all__ = [
    "UrlDatastore",
    "InMemoryUrlDatastore",
    "SnapshotModel",
]
