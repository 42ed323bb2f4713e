# =============================================
# File: hummbl_api/config.py
# Purpose: Environment-driven settings (read at call time so tests can override them)
# =============================================
from __future__ import annotations
import os

from dotenv import load_dotenv

load_dotenv()

API_NAME = "HUMMBL API"
API_VERSION = "1.0.0"

_PKG_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_CATALOG_PATH = os.path.join(_PKG_DIR, "data", "base120.json")


def catalog_path() -> str:
    return os.getenv("HUMMBL_CATALOG_PATH", DEFAULT_CATALOG_PATH)


def rate_limits() -> tuple[int, int]:
    """(max requests, window seconds) per client key."""
    max_reqs = int(os.getenv("RL_MAX_REQS", "100"))
    window_s = int(os.getenv("RL_WINDOW_SECONDS", "60"))
    return max_reqs, window_s


def cache_ttl_seconds() -> int:
    return int(os.getenv("CACHE_TTL_SECONDS", "600"))


def cache_max_entries() -> int:
    return int(os.getenv("CACHE_MAX_ENTRIES", "1000"))


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def log_file() -> str:
    return os.getenv("LOG_FILE", "logs/hummbl.log")


def trust_proxy_headers() -> bool:
    """Take the client address from CF-Connecting-IP / X-Forwarded-For (only behind a proxy that sets them)."""
    return os.getenv("TRUST_PROXY_HEADERS", "false").strip().lower() in ("1", "true", "yes", "on")


def server_host() -> str:
    return os.getenv("HOST", "127.0.0.1")


def server_port() -> int:
    return int(os.getenv("PORT", "8000"))
