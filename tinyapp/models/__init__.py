"""
Record types for tinyapp.

These are plain pydantic models held in process memory by the stores in
tinyapp.storage; there is no database behind them.
"""

from .url import ShortURL, VisitEvent, VisitStats
from .user import User

__all__ = ["ShortURL", "User", "VisitEvent", "VisitStats"]
