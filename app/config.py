"""Application configuration loaded from config.yaml + environment variables."""

from __future__ import annotations

import os

import yaml
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings

_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///data/agenda.db"


def _load_yaml() -> dict:
    if _CONFIG_PATH.exists():
        with open(_CONFIG_PATH) as f:
            return yaml.safe_load(f) or {}
    return {}


_yaml = _load_yaml()


class LoggingConfig(BaseSettings):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class CorsConfig(BaseSettings):
    origins: list[str] = Field(default_factory=lambda: [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
    ])


class ReportConfig(BaseSettings):
    separator_width: int = 57
    # scheduled times strictly before this are the morning shift
    morning_end: str = "12:00"


class TeamsConfig(BaseSettings):
    max_technicians: int = 3


class Settings(BaseSettings):
    database_url: str = DEFAULT_DATABASE_URL
    seed_on_startup: bool = False
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    cors: CorsConfig = Field(default_factory=CorsConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    teams: TeamsConfig = Field(default_factory=TeamsConfig)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


def get_settings() -> Settings:
    """Build Settings by merging YAML defaults with env overrides."""
    y = _yaml
    log = LoggingConfig(**y.get("logging", {}))
    cors = CorsConfig(**y.get("cors", {}))
    rep = ReportConfig(**y.get("report", {}))
    teams = TeamsConfig(**y.get("teams", {}))
    db_url = os.environ.get("DATABASE_URL") or y.get("database", {}).get("url", DEFAULT_DATABASE_URL)
    return Settings(
        database_url=db_url,
        seed_on_startup=y.get("seed_on_startup", False),
        logging=log,
        cors=cors,
        report=rep,
        teams=teams,
    )
