"""Centralised application settings (dotenv + env overrides)."""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from dotenv import load_dotenv

from brewhouse.core.exceptions import ConfigurationError

ROOT = Path(__file__).parents[1]
load_dotenv(ROOT / ".env", override=False)

DEFAULT_PROCESSES = ("gaerung", "maischen", "hopfenkochen")


def _split(raw: str) -> Tuple[str, ...]:
    return tuple(p.strip() for p in raw.split(",") if p.strip())


class settings:                            # pylint: disable=too-few-public-methods
    DATABASE_URL     = os.getenv("DATABASE_URL", f"sqlite:///{ROOT / 'brewhouse.db'}")
    SAMPLE_INTERVAL  = float(os.getenv("SAMPLE_INTERVAL", 5))
    TAIL_LIMIT       = int(os.getenv("TAIL_LIMIT", 50))
    PROCESSES        = _split(os.getenv("PROCESSES", ",".join(DEFAULT_PROCESSES)))
    TIMEZONE         = os.getenv("TIMEZONE", "UTC")
    STORE_TIMEOUT    = float(os.getenv("STORE_TIMEOUT", 10))
    GENERATOR_SEED   = os.getenv("GENERATOR_SEED")
    SEED_CATALOG     = os.getenv("SEED_CATALOG", "1") not in ("0", "false", "False", "")
    STATIC_DIR       = os.getenv("STATIC_DIR", str(ROOT / "dist"))
    HOST             = os.getenv("HOST", "0.0.0.0")
    PORT             = int(os.getenv("PORT", 3002))
    LOG_LEVEL        = os.getenv("LOG_LEVEL", "INFO").upper()


@dataclass(frozen=True)
class BrewhouseConfig:
    """Runtime configuration injected into every component."""
    database_url: str = "sqlite:///brewhouse.db"
    processes: Tuple[str, ...] = DEFAULT_PROCESSES
    sample_interval: float = 5.0
    tail_limit: int = 50
    timezone: str = "UTC"
    store_timeout: float = 10.0
    generator_seed: Optional[int] = None
    seed_catalog: bool = True
    sampler_enabled: bool = True
    static_dir: Optional[str] = None
    tz: ZoneInfo = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.processes:
            raise ConfigurationError("at least one process identifier is required")
        if len(set(self.processes)) != len(self.processes):
            raise ConfigurationError(f"duplicate process identifiers: {self.processes}")
        if self.sample_interval <= 0:
            raise ConfigurationError(f"sample_interval must be positive, got {self.sample_interval}")
        if self.tail_limit <= 0:
            raise ConfigurationError(f"tail_limit must be positive, got {self.tail_limit}")
        if self.store_timeout <= 0:
            raise ConfigurationError(f"store_timeout must be positive, got {self.store_timeout}")
        try:
            object.__setattr__(self, "tz", ZoneInfo(self.timezone))
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigurationError(f"unknown time zone {self.timezone!r}") from e

    @classmethod
    def from_settings(cls) -> "BrewhouseConfig":
        seed = settings.GENERATOR_SEED
        try:
            generator_seed = int(seed) if seed not in (None, "") else None
        except ValueError as e:
            raise ConfigurationError(f"GENERATOR_SEED must be an integer, got {seed!r}") from e
        return cls(
            database_url    = settings.DATABASE_URL,
            processes       = settings.PROCESSES,
            sample_interval = settings.SAMPLE_INTERVAL,
            tail_limit      = settings.TAIL_LIMIT,
            timezone        = settings.TIMEZONE,
            store_timeout   = settings.STORE_TIMEOUT,
            generator_seed  = generator_seed,
            seed_catalog    = settings.SEED_CATALOG,
            static_dir      = settings.STATIC_DIR,
        )
