"""
Configuration
=============
Loads environment variables from .env file using python-dotenv.

Environment Variables:
    GITHUB_TOKEN          — Required. Token with repo + workflow scopes
    GITHUB_REPOSITORY     — Default target repository (owner/repo)
    GITHUB_API_URL        — REST API base URL (default: https://api.github.com)
    RUNS_PER_PAGE         — Runs requested per list page, max 100 (default: 100)
    CANCEL_MAX_WAIT       — Seconds to poll a pre-queue run (default: 30)
    CANCEL_POLL_INTERVAL  — Seconds between polls (default: 3)
    HTTP_TIMEOUT          — Per-request timeout in seconds (default: 20)
    LOG_LEVEL             — Logging level name (default: INFO)
    LOG_FILE              — Optional path for a plain-text log file

Command-line flags override every value except GITHUB_TOKEN.
"""
import os
from dotenv import load_dotenv

load_dotenv()

GITHUB_TOKEN = os.getenv("GITHUB_TOKEN")
GITHUB_REPOSITORY = os.getenv("GITHUB_REPOSITORY")
GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/")

RUNS_PER_PAGE = int(os.getenv("RUNS_PER_PAGE", 100))

# Pre-queue polling window
CANCEL_MAX_WAIT = int(os.getenv("CANCEL_MAX_WAIT", 30))
CANCEL_POLL_INTERVAL = int(os.getenv("CANCEL_POLL_INTERVAL", 3))

HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", 20.0))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE")
