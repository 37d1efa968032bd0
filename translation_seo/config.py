from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

_REPO_ROOT = Path(__file__).resolve().parent.parent
_ENV_LOADED = False
_ENV_FILES = (
    _REPO_ROOT / ".env.local",
    _REPO_ROOT / ".env",
)

DEFAULT_CACHE_CAPACITY = 10_000_000


def _load_env_file(path: Path) -> None:
    """Best-effort `.env` loader that respects already-set variables."""
    if not path.exists():
        return
    for raw in path.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
            value = value[1:-1]
        if key and key not in os.environ:
            os.environ[key] = value


def load_environment() -> None:
    """Load environment files once, preferring explicitly exported values."""
    global _ENV_LOADED
    if _ENV_LOADED:
        return
    for candidate in _ENV_FILES:
        _load_env_file(candidate)
    _ENV_LOADED = True


def _get_env(*keys: str) -> Optional[str]:
    for key in keys:
        value = os.getenv(key)
        if value:
            return value
    return None


def _optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class Settings:
    trends_db_path: Path
    trends_cache_capacity: int
    gcloud_key: Optional[str]
    gcloud_project_id: Optional[str]
    openai_api_key: Optional[str]
    openai_base_url: str
    chat_model_name: str
    scrape_rate_per_second: int
    chat_rate_per_minute: int
    trends_rate_per_minute: int
    http_timeout: int


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached project settings sourced from env variables."""
    load_environment()

    raw_db_path = os.getenv("TRENDS_DB_PATH")
    trends_db_path = Path(raw_db_path).expanduser() if raw_db_path else Path("trends.db")
    trends_cache_capacity = _optional_int(os.getenv("TRENDS_CACHE_CAPACITY")) or DEFAULT_CACHE_CAPACITY

    gcloud_key = _get_env("GCLOUD_KEY", "GOOGLE_API_KEY")
    gcloud_project_id = _get_env("GCLOUD_PROJECT_ID", "GOOGLE_CLOUD_PROJECT")
    openai_api_key = _get_env("OPENAI_KEY", "OPENAI_API_KEY")
    openai_base_url = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    chat_model_name = os.getenv("CHAT_MODEL_NAME", "gpt-3.5-turbo")

    # the trends API quota page says 600/minute; stay a little under it
    scrape_rate_per_second = _optional_int(os.getenv("SCRAPE_RATE_PER_SECOND")) or 20
    chat_rate_per_minute = _optional_int(os.getenv("CHAT_RATE_PER_MINUTE")) or 500
    trends_rate_per_minute = _optional_int(os.getenv("TRENDS_RATE_PER_MINUTE")) or 550
    http_timeout = _optional_int(os.getenv("HTTP_TIMEOUT")) or 30

    return Settings(
        trends_db_path=trends_db_path,
        trends_cache_capacity=trends_cache_capacity,
        gcloud_key=gcloud_key,
        gcloud_project_id=gcloud_project_id,
        openai_api_key=openai_api_key,
        openai_base_url=openai_base_url,
        chat_model_name=chat_model_name,
        scrape_rate_per_second=scrape_rate_per_second,
        chat_rate_per_minute=chat_rate_per_minute,
        trends_rate_per_minute=trends_rate_per_minute,
        http_timeout=http_timeout,
    )


__all__ = ["DEFAULT_CACHE_CAPACITY", "Settings", "get_settings", "load_environment"]
