"""
Centralised settings loader.

Defaults mirror the fixed constants the service has always used (port 3000,
``data/meals.json``, ``public/``); any of them can be overridden through
``MEALS_*`` environment variables or a local ``.env`` file.
"""

from __future__ import annotations
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parent


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class Settings(BaseSettings):
    # ─── runtime ─────────────────────────────────────────────────────
    env_name: str = "local"
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "INFO"

    # ─── storage / assets ───────────────────────────────────────────
    data_file: Path = BASE_DIR / "data" / "meals.json"
    public_dir: Path = BASE_DIR / "public"

    # ─── CORS allow-list (everything else is refused) ──────────────
    cors_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
        ]
    )

    # allow other teammates’ env-vars without crashing
    model_config = {
        "env_prefix": "MEALS_",
        "extra": "ignore",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def get_settings() -> Settings:  # pragma: no cover
    return Settings()
