"""Settings, surface and store endpoints."""

from fastapi import APIRouter, HTTPException

from ..config import settings
from ..models.sort import SurfaceState
from ..models.system import SortSettings, SortSettingsUpdate, StoreAvailability
from ..services.sort_manager import sort_manager
from ..stores.registry import get_all_stores, get_store

router = APIRouter(tags=["system"])


def _current_settings() -> SortSettings:
    return SortSettings(
        enable_in_document=settings.enable_in_document,
        enable_sidebar=settings.enable_sidebar,
        sort_descending=settings.sort_descending,
        debug_mode=settings.debug_mode,
    )


@router.get("/settings", response_model=SortSettings)
async def get_settings():
    return _current_settings()


@router.put("/settings", response_model=SortSettings)
async def update_settings(update: SortSettingsUpdate):
    """Change sorting settings for the lifetime of the process."""
    for field, value in update.model_dump(exclude_none=True).items():
        setattr(settings, field, value)
    return _current_settings()


@router.get("/surfaces", response_model=list[SurfaceState])
async def list_surfaces():
    return sort_manager.get_all_states()


@router.get("/stores", response_model=list[StoreAvailability])
async def list_stores():
    return [store.check_availability() for store in get_all_stores().values()]


@router.get("/stores/{store_id}", response_model=StoreAvailability)
async def get_store_info(store_id: str):
    store = get_store(store_id)
    if not store:
        raise HTTPException(status_code=404, detail="Metadata store not found")
    return store.check_availability()
