from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
)


@dataclass(frozen=True)
class Settings:
    cors_origins: Tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)
    instruments_path: Optional[str] = None  # None => packaged table
    log_level: str = "INFO"


def _split_origins(raw: str) -> Tuple[str, ...]:
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


def get_settings() -> Settings:
    raw_origins = os.getenv("DRIPCALC_CORS_ORIGINS")
    return Settings(
        cors_origins=_split_origins(raw_origins) if raw_origins else DEFAULT_CORS_ORIGINS,
        instruments_path=os.getenv("DRIPCALC_INSTRUMENTS_PATH") or None,
        log_level=os.getenv("DRIPCALC_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
