from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    app_name: str = Field(default="equip-bridge")
    log_level: str = Field(default="INFO")
    catalog_path: Optional[Path] = Field(
        default=None,
        description="JSON item catalog used instead of the built-in one",
    )
    # Read by the external persistence layer, not by the core.
    persist_inventory: bool = Field(default=True)

    model_config = {
        "env_file": (".env", ".env.local", str(Path(__file__).parent.parent.parent / ".env")),
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return cached application settings."""

    return AppSettings()
