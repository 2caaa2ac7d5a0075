import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

APP_VERSION = "1.0.0"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"
    api_prefix: str = ""
    seed_sample_tasks: bool = True
    version: str = APP_VERSION

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", 8000)),
            debug=_env_bool("DEBUG", False),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            api_prefix=os.getenv("API_PREFIX", "").rstrip("/"),
            seed_sample_tasks=_env_bool("SEED_SAMPLE_TASKS", True),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
