"""Sort request and surface models."""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from .common import BacklinkEntry, MetadataRecord, ResolvedEntry


class Surface(str, Enum):
    IN_DOCUMENT = "in-document"
    SIDEBAR = "sidebar"


class SortRequest(BaseModel):
    entries: list[BacklinkEntry] = Field(default_factory=list)
    descending: Optional[bool] = None  # None -> settings.sort_descending
    metadata: Optional[dict[str, MetadataRecord]] = None  # snapshot keyed by ref


class SortResponse(BaseModel):
    descending: bool
    order: list[str] = Field(default_factory=list)
    entries: list[ResolvedEntry] = Field(default_factory=list)


class ResolveRequest(BaseModel):
    label: str
    metadata: Optional[dict[str, MetadataRecord]] = None


class OrderUpdate(BaseModel):
    surface: Surface
    generation: int
    order: list[str] = Field(default_factory=list)


class SurfaceState(BaseModel):
    surface: Surface
    enabled: bool = True
    generation: int = 0
    in_flight: Optional[int] = None  # generation awaiting acknowledgement
    applied_order: list[str] = Field(default_factory=list)
    last_sorted_at: Optional[datetime] = None
    sorts_emitted: int = 0
    notifications_ignored: int = 0
