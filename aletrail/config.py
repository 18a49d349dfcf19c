from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")


@dataclass(frozen=True)
class AppConfig:
    supabase_url: str = os.getenv("SUPABASE_URL", "")
    supabase_key: str = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")
    admin_key: str = os.getenv("ADMIN_KEY", "")
    environment: str = os.getenv("ENVIRONMENT", "development")
    data_backend: str = os.getenv("DATA_BACKEND", "supabase")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    version: str = "1.0.0"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


DEFAULT_CONFIG = AppConfig()


def get_config() -> AppConfig:
    """FastAPI dependency returning the process-wide configuration."""
    return DEFAULT_CONFIG
