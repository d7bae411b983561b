"""Filesystem vault store: markdown notes with YAML frontmatter."""

import logging
from datetime import date
from pathlib import Path
from typing import Any, Optional

import frontmatter
import yaml

from ..config import settings
from ..models.common import MetadataRecord
from ..models.system import StoreAvailability
from .base import BaseMetadataStore
from .registry import register_store

logger = logging.getLogger(__name__)


class VaultStore(BaseMetadataStore):
    store_id = "vault"
    name = "Vault"
    description = "Read note frontmatter and modification times from a vault directory"

    def __init__(self, root: Optional[Path] = None):
        self._root = Path(root) if root is not None else None

    @property
    def root(self) -> Path:
        if self._root is not None:
            return self._root
        # Follow runtime settings when no explicit root was given
        return Path(settings.vault_dir)

    def lookup(self, ref: str) -> Optional[MetadataRecord]:
        path = self._resolve_ref(ref)
        if path is None:
            return None

        try:
            if not path.is_file():
                return None
            stat = path.stat()
        except OSError:
            return None

        return MetadataRecord(
            path=ref,
            frontmatter=self._read_frontmatter(path),
            mtime=stat.st_mtime_ns // 1_000_000,
        )

    def check_availability(self) -> StoreAvailability:
        root = self.root
        if not root.is_dir():
            return StoreAvailability(
                store_id=self.store_id,
                name=self.name,
                description=self.description,
                available=False,
                detail=f"Vault directory not found: {root}",
            )

        try:
            count = sum(1 for _ in root.rglob("*.md"))
        except PermissionError:
            return StoreAvailability(
                store_id=self.store_id,
                name=self.name,
                description=self.description,
                available=False,
                detail=f"Cannot read vault directory: {root}",
            )

        return StoreAvailability(
            store_id=self.store_id,
            name=self.name,
            description=self.description,
            available=True,
            detail=f"{count} notes in {root}",
            count=count,
        )

    def _resolve_ref(self, ref: str) -> Optional[Path]:
        """Map a vault-relative reference to a path inside the vault."""
        if not ref or "\x00" in ref:
            return None

        root = self.root
        try:
            root_resolved = root.resolve()
            path = (root / ref).resolve()
        except (OSError, RuntimeError, ValueError):
            return None

        if path == root_resolved or root_resolved not in path.parents:
            return None
        return path

    def _read_frontmatter(self, path: Path) -> Optional[dict[str, str]]:
        try:
            post = frontmatter.load(str(path))
        except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
            logger.debug(f"Could not read frontmatter from {path}: {e}")
            return None

        if not post.metadata:
            return None
        return normalize_frontmatter(post.metadata)


def normalize_frontmatter(metadata: dict[str, Any]) -> dict[str, str]:
    """Flatten YAML frontmatter to string values.

    YAML loads ``edited: 2025-10-07`` as a ``date``; it is written back as
    ``YYYY-MM-DD`` so it reads the same as the text in the file. Nested
    lists and mappings are dropped.
    """
    result: dict[str, str] = {}
    for key, value in metadata.items():
        if value is None or isinstance(value, (list, dict)):
            continue
        if isinstance(value, date):  # also covers datetime
            result[str(key)] = value.isoformat()
        else:
            result[str(key)] = str(value)
    return result


register_store(VaultStore())
