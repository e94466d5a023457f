"""
kvfacade — Store Backends

Exports available store backend implementations.

The Redis backend is lazy-loaded via factory.py to avoid import overhead.
"""

from .memory import MemoryStore

__all__ = [
    "MemoryStore",
]
