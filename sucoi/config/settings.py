"""
Sucoi - Centralized Configuration
==================================
Uses ``pydantic-settings`` (``BaseSettings``) to load *all* configuration
from environment variables and the project-level ``.env`` file.

Security
--------
- ``GOOGLE_API_KEY`` is typed as ``SecretStr`` and has **no default value**.
  If the key is missing at startup, Pydantic will raise a ``ValidationError``
  with a clear error message.  The raw value is never exposed in repr,
  logs, or tracebacks.
- ``MONGO_URI`` is also ``SecretStr``; connection strings contain
  credentials and must never leak into logs.

Paths
-----
``STATIC_DIR`` is ``Path.resolve()``-d at class level so the dashboard is
found regardless of the working directory uvicorn is started from.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application-wide settings.

    Every field is loaded from environment variables (or ``.env``).
    Fields *without* a default are **required**; the app will refuse
    to start until they are provided.

    Attributes
    ----------
    ENV : Literal["dev", "prod"]
        Environment mode controlling logging verbosity.
    GOOGLE_API_KEY : SecretStr
        API key for Google AI Studio (Gemini).  **Required.**
    MONGO_URI : SecretStr
        MongoDB connection string.  **Required.**  Never log the raw value.
    MONGO_DB_NAME : str
        Database holding the ``users``, ``goals`` and ``chats`` collections.
    LLM_MODEL : str
        Gemini model used for companion replies.
    LLM_TEMPERATURE : float
        Sampling temperature for companion replies.
    LLM_MAX_OUTPUT_TOKENS : int
        Upper bound on reply length.
    HOST, PORT : str, int
        Bind address for uvicorn.
    STATIC_DIR : Path
        Directory holding ``dashboard.html`` and its assets.
    CORS_ORIGINS : list[str]
        Origins allowed by the CORS middleware.
    """

    # ── Resolved Absolute Paths ────────────────────────────────────────
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    STATIC_DIR: Path = BASE_DIR / "static"

    # ── Environment Mode ───────────────────────────────────────────────
    ENV: Literal["dev", "prod"] = "dev"

    # ── API Keys (REQUIRED, no default) ───────────────────────────────
    GOOGLE_API_KEY: SecretStr

    # ── MongoDB (REQUIRED, no default) ────────────────────────────────
    MONGO_URI: SecretStr
    MONGO_DB_NAME: str = "sucoi"

    # ── Model Configuration ────────────────────────────────────────────
    LLM_MODEL: str = "gemini-2.0-flash"
    LLM_TEMPERATURE: float = 0.8
    LLM_MAX_OUTPUT_TOKENS: int = 500

    # ── HTTP Server ────────────────────────────────────────────────────
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    CORS_ORIGINS: list[str] = ["*"]

    # ── Validators ─────────────────────────────────────────────────────

    @field_validator("LLM_TEMPERATURE")
    @classmethod
    def _temperature_range(cls, v: float) -> float:
        if not 0.0 <= v <= 2.0:
            raise ValueError(f"LLM_TEMPERATURE must be 0.0–2.0, got {v}")
        return v


    @field_validator("LLM_MAX_OUTPUT_TOKENS")
    @classmethod
    def _max_tokens_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"LLM_MAX_OUTPUT_TOKENS must be ≥ 1, got {v}")
        return v

    # ── Pydantic Settings Configuration ────────────────────────────────
    model_config = SettingsConfigDict(env_file=Path(__file__).resolve().parent.parent.parent / ".env", env_file_encoding="utf-8", extra="ignore")


# ── Singleton Instance ─────────────────────────────────────────────────
# Import this throughout the project:
#     from sucoi.config.settings import settings
settings = Settings()
