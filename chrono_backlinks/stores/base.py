"""Abstract metadata store interface."""

from abc import ABC, abstractmethod
from typing import Optional

from ..models.common import MetadataRecord
from ..models.system import StoreAvailability


class BaseMetadataStore(ABC):
    """All metadata stores implement this interface.

    A store answers lookups by document reference (a vault-relative path
    such as ``"Daily Notes/December 4th, 2025.md"``). Lookups are read-only
    and must never raise for a missing document; they return ``None``.
    """

    store_id: str = ""
    name: str = ""
    description: str = ""

    @abstractmethod
    def lookup(self, ref: str) -> Optional[MetadataRecord]:
        """Return the metadata record for ``ref``, or None if absent."""
        ...

    @abstractmethod
    def check_availability(self) -> StoreAvailability:
        """Check whether this store can answer lookups right now."""
        ...

    def __call__(self, ref: str) -> Optional[MetadataRecord]:
        return self.lookup(ref)
