"""
Storage module for tinyapp.
Implements Strategy Pattern for user and short URL stores.
"""

from .strategies import UserStore, URLStore, InMemoryUserStore, InMemoryURLStore

__all__ = [
    "UserStore",
    "URLStore",
    "InMemoryUserStore",
    "InMemoryURLStore",
]
