"""
Centralised client settings loaded from environment / .env file.

Uses pydantic-settings so every value can be overridden via env vars
or the .env file at the project root.
"""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings

PROGRESS_STRATEGIES = ("time_ratio", "attendance_weighted", "randomized_blend")


class Settings(BaseSettings):
    # ── Project ──────────────────────────────────────────────────────
    PROJECT_NAME: str = "StaffHub"
    VERSION: str = "1.0.0"

    # ── Remote API ───────────────────────────────────────────────────
    API_BASE_URL: str = "http://localhost:8080/api"
    REQUEST_TIMEOUT_SECONDS: float = 10.0

    # ── Local store fallback ─────────────────────────────────────────
    FALLBACK_LATENCY_MS: int = 300  # simulated round-trip for offline mode

    # ── Project progress ─────────────────────────────────────────────
    PROGRESS_STRATEGY: str = "time_ratio"
    ATTENDANCE_WEIGHT_PER_DAY: int = 2
    TEAM_BONUS_PER_MEMBER: int = 3
    TEAM_BONUS_CAP: int = 20
    PERTURBATION_SPREAD: int = 10

    @field_validator("PROGRESS_STRATEGY", mode="before")
    @classmethod
    def _parse_strategy(cls, v: object) -> str:
        name = str(v).strip().lower().replace("-", "_")
        if name not in PROGRESS_STRATEGIES:
            raise ValueError(f"PROGRESS_STRATEGY must be one of: {PROGRESS_STRATEGIES}")
        return name

    @field_validator("API_BASE_URL")
    @classmethod
    def _check_base_url(cls, v: str) -> str:
        if not v.lower().startswith(("http://", "https://")):
            raise ValueError("API_BASE_URL must start with http:// or https://")
        return v.rstrip("/")

    # ── Logging ──────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }


settings = Settings()
