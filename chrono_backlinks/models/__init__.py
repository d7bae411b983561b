"""Data models."""

from .common import (
    BacklinkEntry,
    ElementNode,
    MetadataRecord,
    Resolution,
    ResolvedEntry,
    TimestampSource,
)
from .sort import OrderUpdate, ResolveRequest, SortRequest, SortResponse, Surface, SurfaceState
from .system import SortSettings, SortSettingsUpdate, StoreAvailability

__all__ = [
    "BacklinkEntry",
    "ElementNode",
    "MetadataRecord",
    "Resolution",
    "ResolvedEntry",
    "TimestampSource",
    "OrderUpdate",
    "ResolveRequest",
    "SortRequest",
    "SortResponse",
    "Surface",
    "SurfaceState",
    "SortSettings",
    "SortSettingsUpdate",
    "StoreAvailability",
]
