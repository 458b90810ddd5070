from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    if val in {"1", "true", "yes", "y", "on"}:
        return True
    if val in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.environ.get(name)
    return Path(raw) if raw else default


@dataclass(frozen=True)
class Settings:
    """Static settings for the editor effects layer.

    Everything is read once at import time; tests build their own
    instances instead of mutating this one.
    """

    root_dir: Path = Path(__file__).resolve().parents[2]
    data_dir: Path = _env_path("SCRIBE_DATA_DIR", root_dir / ".scribe-data")
    log_path: Path = data_dir / "scribe.log"
    log_level: str = os.environ.get("SCRIBE_LOG_LEVEL", "INFO")
    log_max_bytes: int = int(os.environ.get("SCRIBE_LOG_MAX_BYTES", str(1_000_000)))
    log_backup_count: int = int(os.environ.get("SCRIBE_LOG_BACKUP_COUNT", "3"))
    log_to_file: bool = _env_bool("SCRIBE_LOG_TO_FILE", True)

    # =========================================================================
    # Remote REST API (reusable block persistence)
    # =========================================================================
    api_url: str = os.environ.get("SCRIBE_API_URL", "http://127.0.0.1:8080/wp-json/wp/v2")
    api_token: str | None = os.environ.get("SCRIBE_API_TOKEN") or None
    reusable_blocks_path: str = os.environ.get("SCRIBE_REUSABLE_BLOCKS_PATH", "blocks")


settings = Settings()
