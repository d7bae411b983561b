"""Metadata stores."""

from .registry import register_store, get_store, get_all_stores, default_store
from .vault import VaultStore
from .memory import InMemoryStore

__all__ = [
    "register_store",
    "get_store",
    "get_all_stores",
    "default_store",
    "VaultStore",
    "InMemoryStore",
]
