"""Settings and store information models."""

from typing import Optional
from pydantic import BaseModel


class SortSettings(BaseModel):
    enable_in_document: bool = True
    enable_sidebar: bool = True
    sort_descending: bool = True
    debug_mode: bool = False


class SortSettingsUpdate(BaseModel):
    enable_in_document: Optional[bool] = None
    enable_sidebar: Optional[bool] = None
    sort_descending: Optional[bool] = None
    debug_mode: Optional[bool] = None


class StoreAvailability(BaseModel):
    store_id: str
    name: str
    description: str = ""
    available: bool = False
    detail: str = ""
    count: Optional[int] = None  # e.g. number of notes in the vault
