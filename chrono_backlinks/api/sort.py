"""Sort and resolve API endpoints."""

from typing import Optional

from fastapi import APIRouter, HTTPException

from ..config import settings
from ..models.common import MetadataRecord, Resolution
from ..models.sort import ResolveRequest, SortRequest, SortResponse
from ..services.sort_manager import sort_manager
from ..services.timestamps import MetadataLookup, explain_timestamp
from ..stores.memory import InMemoryStore

router = APIRouter(tags=["sort"])


def _lookup_for(metadata: Optional[dict[str, MetadataRecord]]) -> MetadataLookup:
    if metadata is not None:
        return InMemoryStore(metadata)
    lookup = sort_manager.lookup
    if lookup is None:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown metadata store: {settings.metadata_store}",
        )
    return lookup


@router.post("/sort", response_model=SortResponse)
async def sort_backlinks(request: SortRequest):
    descending = settings.sort_descending if request.descending is None else request.descending
    resolved = sort_manager.sort_now(
        request.entries,
        lookup=_lookup_for(request.metadata),
        descending=descending,
    )
    return SortResponse(
        descending=descending,
        order=[r.id for r in resolved],
        entries=resolved,
    )


@router.post("/resolve", response_model=Resolution)
async def resolve_label(request: ResolveRequest):
    return explain_timestamp(request.label, _lookup_for(request.metadata))
