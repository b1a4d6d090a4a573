"""Configuration for the Tournaments API."""
from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Database
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"sqlite+aiosqlite:///{Path(__file__).parent / 'tournaments.db'}",
)
SQL_ECHO = os.getenv("SQL_ECHO", "").lower() in ("1", "true", "yes")

# "development" enables the test utility reset endpoint
ENVIRONMENT = os.getenv("ENVIRONMENT", "development").strip().lower()

# Web server
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def _parse_origins(value: str) -> list[str]:
    if not value:
        return []
    return [x.strip() for x in value.split(",") if x.strip()]


# Origins allowed to call the API from a browser (comma-separated)
CORS_ORIGINS = _parse_origins(os.getenv("CORS_ORIGINS", "http://localhost:5181"))


def is_development() -> bool:
    return ENVIRONMENT == "development"
