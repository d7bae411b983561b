"""Extract, resolve and sort a batch of backlink entries."""

import logging
from typing import Optional

from ..config import settings
from ..models.common import BacklinkEntry, ResolvedEntry
from .labels import entry_label
from .sorter import sort_entries
from .timestamps import MetadataLookup, explain_timestamp, format_timestamp

logger = logging.getLogger(__name__)


def order_entries(
    entries: list[BacklinkEntry],
    lookup: Optional[MetadataLookup] = None,
    descending: Optional[bool] = None,
    debug: Optional[bool] = None,
) -> list[ResolvedEntry]:
    """Resolve each entry's timestamp and return them in sorted order."""
    if descending is None:
        descending = settings.sort_descending
    if debug is None:
        debug = settings.debug_mode

    if debug:
        logger.debug(f"Sorting {len(entries)} backlinks (descending={descending})")

    resolved = []
    for entry in entries:
        label = entry_label(entry, debug=debug)
        resolution = explain_timestamp(label, lookup, debug=debug)
        resolved.append(ResolvedEntry(
            id=entry.id,
            label=label,
            timestamp=resolution.timestamp,
            source=resolution.source,
        ))

    ordered = sort_entries([(r, r.timestamp) for r in resolved], descending=descending)

    if debug:
        preview = [f"{r.label} ({format_timestamp(r.timestamp)})" for r in ordered[:10]]
        logger.debug(f"Sorted order: {preview}")

    return ordered
