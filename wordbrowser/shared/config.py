# wordbrowser/shared/config.py
import os
from enum import Enum
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnv(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class StorageBackend(str, Enum):
    MEMORY = "memory"
    FILESYSTEM = "filesystem"


class Settings(BaseSettings):
    """
    Central Configuration Registry.
    Strictly typed and validated via Pydantic; every field can be set from
    the environment or a .env file (prefix WB_).
    """

    # --- Application Meta ---
    APP_NAME: str = "Word Browser"
    APP_ENV: AppEnv = AppEnv.DEVELOPMENT
    DEBUG: bool = True

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"  # "console" | "json"

    # --- Dataset ---
    # Directory or http(s) base URL the candidate paths are resolved against
    DATA_BASE: str = os.getcwd()
    # Tried in order until one answers with a success status
    DATASET_CANDIDATES: List[str] = ["data/words.json", "Data/words.json"]
    DATASET_TIMEOUT: Optional[float] = 30.0

    # --- Icons ---
    ICON_DIR: str = os.path.join(os.getcwd(), "icons")

    # --- Persistence ---
    STORAGE_BACKEND: StorageBackend = StorageBackend.FILESYSTEM
    STORAGE_PATH: str = os.path.join(os.getcwd(), ".wordbrowser", "storage.json")
    STORAGE_QUOTA_BYTES: Optional[int] = 5 * 1024 * 1024
    FAVORITES_KEY: str = "favWords"
    OVERRIDES_KEY: str = "wordbrowser.overrides"

    # --- Query defaults ---
    DEFAULT_PAGE_SIZE: int = 20
    # Tags checked after "reset filters"
    DEFAULT_TAGS: List[str] = ["core", "common"]

    model_config = SettingsConfigDict(env_prefix="WB_", env_file=".env", extra="ignore")


settings = Settings()
