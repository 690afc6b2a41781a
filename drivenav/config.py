from pathlib import Path
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from functools import lru_cache

class Settings(BaseSettings):
    """
    Centralized application configuration with type validation.
    Automatically reads variables from the environment and the .env file.
    """
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- General Settings ---
    STORAGE_PROVIDER: str = "gdrive"  # "gdrive" or "memory"
    LOG_LEVEL: str = "INFO"

    # --- Google Drive Settings (optional) ---
    GDRIVE_CREDENTIALS_JSON: Optional[str] = None
    GDRIVE_TOKEN_JSON: Optional[str] = None
    GDRIVE_ROOT_FOLDER_ID: str = "root"
    GDRIVE_PAGE_SIZE: int = 1000

    # --- HTTP Fetch Settings ---
    HTTP_TIMEOUT_SECONDS: float = 30.0
    FETCH_RATE_LIMIT_REQUESTS: Optional[int] = None
    FETCH_RATE_LIMIT_WAIT_MS: int = 1000

    # --- Constants and Computed Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent

    @model_validator(mode='before')
    @classmethod
    def validate_storage_provider_settings(cls, values):
        provider = values.get('STORAGE_PROVIDER') or "gdrive"

        if provider == "gdrive":
            required_gdrive_keys = ["GDRIVE_CREDENTIALS_JSON", "GDRIVE_TOKEN_JSON"]
            for key in required_gdrive_keys:
                if not values.get(key) or not str(values.get(key)).strip():
                    raise ValueError(f"{key} is required when STORAGE_PROVIDER is 'gdrive'")

        elif provider != "memory":
            raise ValueError("Invalid STORAGE_PROVIDER. Must be 'gdrive' or 'memory'.")

        rate_limit = values.get('FETCH_RATE_LIMIT_REQUESTS')
        if rate_limit is not None and str(rate_limit).strip() and int(rate_limit) <= 0:
            raise ValueError("FETCH_RATE_LIMIT_REQUESTS must be a positive integer")

        return values

    @property
    def FETCH_RATE_LIMIT(self) -> tuple:
        """(requests, wait_ms) pair for batch fetches, or an empty tuple when unlimited."""
        if not self.FETCH_RATE_LIMIT_REQUESTS:
            return ()
        return (self.FETCH_RATE_LIMIT_REQUESTS, self.FETCH_RATE_LIMIT_WAIT_MS)

    @property
    def LOG_FILE(self) -> Path:
        return self.BASE_DIR / "drivenav.log"


@lru_cache()
def get_settings() -> Settings:
    """
    Returns a cached instance of the application settings.
    The first call to this function will initialize the settings.
    """
    return Settings()
