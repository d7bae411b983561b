"""In-memory metadata store for host-supplied snapshots and tests."""

import time
from typing import Optional

from ..models.common import MetadataRecord
from ..models.system import StoreAvailability
from .base import BaseMetadataStore
from .registry import register_store


class InMemoryStore(BaseMetadataStore):
    store_id = "memory"
    name = "In-memory"
    description = "Metadata records held in process memory"

    def __init__(self, records: Optional[dict[str, MetadataRecord]] = None):
        self._records: dict[str, MetadataRecord] = dict(records or {})

    def add(
        self,
        ref: str,
        frontmatter: Optional[dict[str, str]] = None,
        mtime: Optional[int] = None,
    ) -> MetadataRecord:
        record = MetadataRecord(
            path=ref,
            frontmatter=frontmatter,
            mtime=int(time.time() * 1000) if mtime is None else mtime,
        )
        self._records[ref] = record
        return record

    def lookup(self, ref: str) -> Optional[MetadataRecord]:
        return self._records.get(ref)

    def check_availability(self) -> StoreAvailability:
        return StoreAvailability(
            store_id=self.store_id,
            name=self.name,
            description=self.description,
            available=True,
            detail=f"{len(self._records)} records in memory",
            count=len(self._records),
        )


register_store(InMemoryStore())
