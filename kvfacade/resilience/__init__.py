"""
kvfacade - Resilience Module

Retry scheduling for the exclusive set operation.
"""

from .backoff import BackoffPolicy, backoff_delay

__all__ = [
    "BackoffPolicy",
    "backoff_delay",
]
