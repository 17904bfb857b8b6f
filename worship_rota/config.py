import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Falls back to a local SQLite file so the API can boot without a hosted database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./worship_rota.db")

# Redis Configuration (occurrence memoization)
REDIS_URL = os.getenv("REDIS_URL")
REDIS_HOST = os.getenv("REDIS_HOST")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_PASSWORD = os.getenv("REDIS_PASSWORD")
REDIS_DB = int(os.getenv("REDIS_DB", "0"))
REDIS_SSL = os.getenv("REDIS_SSL", "false").lower() == "true"

CACHE_ENABLED = os.getenv("CACHE_ENABLED", "true").lower() == "true"
# Expanded occurrences are cheap to recompute; keep them short-lived
OCCURRENCE_CACHE_TTL = int(os.getenv("OCCURRENCE_CACHE_TTL", "300"))

# Frontend base URL used for CORS defaults
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    f"{FRONTEND_URL},http://localhost:3000",
).split(",")
