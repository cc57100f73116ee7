from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from quiz_extractor.markers import DEFAULT_MARKERS, MarkerTable

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"

DEFAULTS = {
    "db_path": ":memory:",
    "max_upload_bytes": 50 * 1024 * 1024,
    "words_per_page": 250,
    "strict_mode": False,
    "markers": {},
    "host": "127.0.0.1",
    "port": 8765,
}


@dataclass
class Settings:
    db_path: str = DEFAULTS["db_path"]
    max_upload_bytes: int = DEFAULTS["max_upload_bytes"]
    words_per_page: int = DEFAULTS["words_per_page"]
    strict_mode: bool = DEFAULTS["strict_mode"]
    markers: dict[str, str] = field(default_factory=lambda: dict(DEFAULTS["markers"]))
    host: str = DEFAULTS["host"]
    port: int = DEFAULTS["port"]

    @property
    def project_root(self) -> Path:
        return Path(__file__).resolve().parent.parent

    @property
    def db_full_path(self) -> str:
        # SQLite's in-memory database is addressed by name, not by path
        if self.db_path == ":memory:":
            return self.db_path
        return str(self.project_root / self.db_path)

    def marker_table(self) -> MarkerTable:
        if not self.markers:
            return DEFAULT_MARKERS
        return DEFAULT_MARKERS.with_overrides(self.markers)

    def to_dict(self) -> dict:
        return {
            "db_path": self.db_path,
            "max_upload_bytes": self.max_upload_bytes,
            "words_per_page": self.words_per_page,
            "strict_mode": self.strict_mode,
            "markers": self.markers,
            "host": self.host,
            "port": self.port,
        }


def validate_settings(settings: Settings) -> Settings:
    """Raise ValueError for settings the extractor cannot run with."""
    settings.marker_table()
    if settings.words_per_page < 1:
        raise ValueError("words_per_page must be at least 1")
    if settings.max_upload_bytes < 1:
        raise ValueError("max_upload_bytes must be at least 1")
    return settings


def load_settings() -> Settings:
    if CONFIG_PATH.exists():
        raw = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
        known = {f.name for f in Settings.__dataclass_fields__.values()}
        filtered = {k: v for k, v in raw.items() if k in known}
        return validate_settings(Settings(**filtered))
    return Settings()


def save_settings(settings: Settings) -> None:
    CONFIG_PATH.write_text(
        json.dumps(settings.to_dict(), indent=4, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
