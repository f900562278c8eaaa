from pydantic import BaseModel, Field, computed_field, ConfigDict
from typing import List, Optional
from datetime import datetime
from tinyapp.config import settings


class URLCreate(BaseModel):
    # plain str, not HttpUrl: "example.com" is accepted and gets http:// added
    long_url: str = Field("", description="The URL to shorten; http:// is added if missing")


class URLUpdate(BaseModel):
    long_url: str = Field("", description="The new destination URL")


class VisitEventResponse(BaseModel):
    timestamp: datetime
    visitor_id: str

    model_config = ConfigDict(from_attributes=True)


class VisitStatsResponse(BaseModel):
    total: int
    unique: int

    model_config = ConfigDict(from_attributes=True)


class URLResponse(BaseModel):
    """Response schema that serializes a ShortURL record

    - from_attributes=True reads straight from the record's attributes
    - @computed_field builds the public short link from short_key
    """
    short_key: str
    long_url: str
    owner_id: str
    created_at: datetime
    last_modified_at: Optional[datetime] = None

    @computed_field
    @property
    def short_url(self) -> str:
        """Computed field - the link people actually visit"""
        return f"{settings.base_url}/u/{self.short_key}"

    model_config = ConfigDict(from_attributes=True)


class URLDetail(URLResponse):
    """Single-link view: the record, its visit counters and the visit log"""
    visits: VisitStatsResponse
    visit_log: List[VisitEventResponse] = Field(default_factory=list, description="Every visit, oldest first")


class URLUpdateResponse(URLResponse):
    updated: bool = Field(..., description="False when the submitted URL was already the destination")


class URLStats(BaseModel):
    short_key: str
    total: int
    unique: int
    created_at: datetime
    last_visited_at: Optional[datetime] = None
