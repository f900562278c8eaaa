from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class VisitEvent(BaseModel):
    """
    One resolution of a short key.

    visitor_id is the anonymous per-session token, not a user ID, so
    logged-out visits are counted too.
    """

    timestamp: datetime = Field(default_factory=utcnow, description="When the visit happened")
    visitor_id: str = Field(..., min_length=1, description="Per-browser-session visitor token")

    model_config = ConfigDict(frozen=True)


class ShortURL(BaseModel):
    """
    A short key and the long URL it points to.

    Only the owner may change long_url (which also stamps last_modified_at)
    or delete the record. visit_log is append-only.
    """

    short_key: str = Field(..., min_length=1, description="Unique short alias")
    owner_id: str = Field(..., min_length=1, description="ID of the user who created the link")
    long_url: str = Field(..., min_length=1, description="Scheme-normalized destination URL")
    created_at: datetime = Field(default_factory=utcnow)
    last_modified_at: Optional[datetime] = Field(None, description="None until the first real update")
    visit_log: List[VisitEvent] = Field(default_factory=list)

    model_config = ConfigDict(validate_assignment=True)


class VisitStats(BaseModel):
    """Visit counters derived from a ShortURL's visit_log"""

    total: int = Field(..., ge=0, description="Number of recorded visits")
    unique: int = Field(..., ge=0, description="Number of distinct visitor IDs")

    @classmethod
    def from_log(cls, visit_log: List[VisitEvent]) -> "VisitStats":
        return cls(
            total=len(visit_log),
            unique=len({visit.visitor_id for visit in visit_log}),
        )
