"""Configuration load/save for duecal."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

CONFIG_PATH = Path(__file__).resolve().parent / "config.json"


class AppConfig(BaseModel):
    """Persisted application configuration."""

    user_timezone: str = Field(default="", description="IANA timezone used to decide 'today' (e.g. Asia/Jakarta). Empty = system local time.")
    horizon_months: int = Field(default=12, ge=1, le=120, description="How far ahead recurring tasks are projected onto the calendar")
    upcoming_window_hours: int = Field(default=48, ge=1, le=24 * 31, description="Tasks due within this many hours show as upcoming")
    web_ui_port: int = Field(default=8081, ge=1, le=65535, description="Port for the HTTP API")
    debug: bool = Field(default=False, description="Log every API request and response status")
    log_level: str = Field(default="INFO", description="Root logging level for run.py")

    def to_save_dict(self) -> dict[str, Any]:
        return self.model_dump()

    @classmethod
    def load(cls, path: Path | None = None) -> "AppConfig":
        path = path or CONFIG_PATH
        if not path.exists():
            return cls()
        raw = json.loads(path.read_text())
        return cls.model_validate(raw)

    def save(self, path: Path | None = None) -> None:
        (path or CONFIG_PATH).write_text(json.dumps(self.to_save_dict(), indent=2))


def load() -> AppConfig:
    """Load config from disk. Convenience alias for AppConfig.load()."""
    return AppConfig.load()
