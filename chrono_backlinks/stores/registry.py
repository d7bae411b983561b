"""Metadata store registration."""

from typing import Optional

from ..config import settings
from .base import BaseMetadataStore

_registry: dict[str, BaseMetadataStore] = {}


def register_store(store: BaseMetadataStore) -> None:
    _registry[store.store_id] = store


def get_store(store_id: str) -> Optional[BaseMetadataStore]:
    return _registry.get(store_id)


def get_all_stores() -> dict[str, BaseMetadataStore]:
    return dict(_registry)


def default_store() -> Optional[BaseMetadataStore]:
    """The store selected by ``settings.metadata_store``."""
    return _registry.get(settings.metadata_store)
