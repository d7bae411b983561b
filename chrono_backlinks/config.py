"""Application settings."""

from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 8788
    debug: bool = False
    vault_dir: Path = Path.cwd()
    daily_notes_folder: str = "Daily Notes"
    note_suffix: str = ".md"
    metadata_store: str = "vault"

    # Sorting behaviour
    enable_in_document: bool = True
    enable_sidebar: bool = True
    sort_descending: bool = True  # newest first
    debug_mode: bool = False

    # Surface adapter timing
    debounce_ms: int = 150
    settle_ms: int = 50

    model_config = {"env_prefix": "CHRONO_"}


settings = Settings()
