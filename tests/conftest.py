"""Shared fixtures."""

from datetime import datetime
from pathlib import Path

import pytest

from chrono_backlinks.config import settings
from chrono_backlinks.services.sort_manager import sort_manager
from chrono_backlinks.stores.memory import InMemoryStore


def ms(year: int, month: int, day: int) -> int:
    """Local midnight in ms, the way dates resolve."""
    return int(datetime(year, month, day).timestamp() * 1000)


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    """Every test starts from the default sorting settings."""
    monkeypatch.setattr(settings, "enable_in_document", True)
    monkeypatch.setattr(settings, "enable_sidebar", True)
    monkeypatch.setattr(settings, "sort_descending", True)
    monkeypatch.setattr(settings, "debug_mode", False)
    monkeypatch.setattr(settings, "daily_notes_folder", "Daily Notes")
    monkeypatch.setattr(settings, "note_suffix", ".md")
    monkeypatch.setattr(settings, "metadata_store", "vault")
    yield
    sort_manager.reset()


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def temp_vault(tmp_path, monkeypatch):
    """An empty vault directory, also set as the configured vault."""
    vault_path = tmp_path / "vault"
    vault_path.mkdir()
    monkeypatch.setattr(settings, "vault_dir", vault_path)
    return vault_path


def write_note(vault: Path, ref: str, body: str = "", frontmatter: str = "") -> Path:
    path = vault / ref
    path.parent.mkdir(parents=True, exist_ok=True)
    text = f"---\n{frontmatter}---\n{body}" if frontmatter else body
    path.write_text(text, encoding="utf-8")
    return path
