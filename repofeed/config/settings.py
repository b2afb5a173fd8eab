import os
from dotenv import load_dotenv

load_dotenv()

APP_ENV = os.getenv("APP_ENV", "production").lower()
DEBUG_MODE = os.getenv("DEBUG_MODE", "false").lower() == "true"

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./repofeed.db")
AUTO_CREATE_TABLES = os.getenv("AUTO_CREATE_TABLES", "true").lower() == "true"

LOG_DRIVER: str = os.getenv("LOG_DRIVER", "console")
LOG_FILE: str = os.getenv("LOG_FILE", "repofeed.log")

# Unset secret means signatures are not checked.
GITHUB_WEBHOOK_SECRET = os.getenv("GITHUB_WEBHOOK_SECRET") or None
GITHUB_TOKEN = os.getenv("GITHUB_TOKEN") or None
GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com")
GITHUB_API_TIMEOUT = float(os.getenv("GITHUB_API_TIMEOUT", 10))

TRACK_CLOSED_PRS = os.getenv("TRACK_CLOSED_PRS", "false").lower() == "true"
