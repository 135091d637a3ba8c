"""Runtime configuration read from environment variables.

All settings have development defaults so the app starts against a local
SQLite file without any environment set up.
"""

import os

# Read/Write partitioning: point READ_DATABASE_URL at a replica in production.
WRITE_DATABASE_URL = os.getenv("WRITE_DATABASE_URL", "sqlite:///welltrack.db")
READ_DATABASE_URL = os.getenv("READ_DATABASE_URL", WRITE_DATABASE_URL)

# Generative text API (Gemini REST)
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
GEMINI_API_BASE = os.getenv("GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta")

# Generative image API: POST {"prompt", "label"} -> {"url": ...}
IMAGE_API_URL = os.getenv("IMAGE_API_URL", "")
IMAGE_API_KEY = os.getenv("IMAGE_API_KEY", "")

AI_TIMEOUT_SECONDS = float(os.getenv("AI_TIMEOUT_SECONDS", "60"))

SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "welltrack_session")
SESSION_TTL_HOURS = int(os.getenv("SESSION_TTL_HOURS", "720"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", os.path.join(os.path.dirname(__file__), "..", "logs"))

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()]
