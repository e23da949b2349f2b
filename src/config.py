"""Configuration module for the Progress Tracker API.

This module provides centralized configuration management, including directory
paths, API server settings, database settings, and grader LLM configuration.
All configuration values can be overridden via environment variables.
"""

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Directory Configuration ---

# Root directory of the project
ROOT_DIR = Path(__file__).parent.parent.resolve()

# Static front-end directory (index.html etc.)
PUBLIC_DIR = Path(os.getenv("PUBLIC_DIR", str(ROOT_DIR / "public")))

# --- API Server Configuration ---

API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("PORT", "3000"))

# CORS allowed origins (comma-separated list)
_CORS_ALLOWED_ORIGINS_STR: str = os.getenv(
    "CORS_ALLOWED_ORIGINS",
    "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,"
    "http://127.0.0.1:3000",
)
CORS_ALLOWED_ORIGINS: List[str] = [
    origin.strip()
    for origin in _CORS_ALLOWED_ORIGINS_STR.split(",")
    if origin.strip()
]

# --- Database Configuration ---

# Required. When unset, every storage operation fails with a server error.
DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL") or None
# Hosted Postgres providers still hand out the legacy scheme
if DATABASE_URL and DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = "postgresql://" + DATABASE_URL[len("postgres://"):]

DB_CONNECT_TIMEOUT: int = int(os.getenv("DB_CONNECT_TIMEOUT", "10"))

# --- Grader LLM Configuration ---

# Name of the environment variable holding the judgment service credential.
# The value itself is read per request so a missing key fails the request,
# not the process.
GRADER_API_KEY_ENV: str = "GROQ_API_KEY"

GRADER_BASE_URL: str = os.getenv(
    "GRADER_BASE_URL", "https://api.groq.com/openai/v1"
)
GRADER_MODEL: str = os.getenv("GRADER_MODEL", "llama-3.3-70b-versatile")
GRADER_MAX_TOKENS: int = int(os.getenv("GRADER_MAX_TOKENS", "150"))
GRADER_TEMPERATURE: float = float(os.getenv("GRADER_TEMPERATURE", "0.1"))

# Hint returned when the model's verdict cannot be parsed as JSON
DEFAULT_GRADER_HINT: str = "Review the concept and try again."

# --- Logging Configuration ---

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
