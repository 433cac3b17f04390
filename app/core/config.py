# Settings management (reads env vars/secrets)
# app/core/config.py

import logging
import os
import sys
from functools import lru_cache
from typing import List, Union

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Set up logging early so settings loading is visible
logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application configuration settings loaded from environment variables or .env file.
    """
    # --- Project Info ---
    PROJECT_NAME: str = Field("Movie Catalog API", validation_alias="PROJECT_NAME")
    API_PREFIX: str = Field("/api", validation_alias="API_PREFIX")
    VERSION: str = Field("1.0.0", validation_alias="APP_VERSION")

    # --- Logging ---
    LOG_LEVEL: str = Field("INFO", validation_alias="LOG_LEVEL")

    # --- Database (MongoDB) ---
    # SecretStr keeps credentials in the URI out of logs
    MONGODB_URI: SecretStr = Field(..., validation_alias="MONGODB_URI")
    # Used only when the URI does not name a database
    MONGODB_DB_NAME: str = Field("movie_catalog", validation_alias="MONGODB_DB_NAME")
    MONGODB_COLLECTION: str = Field("movies", validation_alias="MONGODB_COLLECTION")
    MONGODB_TIMEOUT_MS: int = Field(
        default=5000,
        validation_alias="MONGODB_TIMEOUT_MS",
        description="Server selection and socket timeout for store calls, in milliseconds"
    )

    # --- Authorization ---
    ADMIN_ROLE_HEADER: str = Field("role", validation_alias="ADMIN_ROLE_HEADER")
    ADMIN_ROLE_VALUE: str = Field("admin", validation_alias="ADMIN_ROLE_VALUE")

    # --- Server ---
    HOST: str = Field("0.0.0.0", validation_alias="HOST")
    PORT: int = Field(8000, validation_alias="PORT")

    # --- CORS ---
    # Env var holds a JSON list like '["http://localhost:3000","https://example.com"]'
    BACKEND_CORS_ORIGINS: List[str] = Field(
        default=["*"],
        validation_alias="BACKEND_CORS_ORIGINS"
    )

    @field_validator("BACKEND_CORS_ORIGINS", mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, list):
            return v
        raise ValueError(f"Invalid BACKEND_CORS_ORIGINS format: {v}")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )


# Loaded once and shared
@lru_cache()
def get_settings() -> Settings:
    """Returns the application settings instance."""
    logger.info("Attempting to load application settings...")
    try:
        settings_instance = Settings()
        logger.info(f"Settings loaded successfully for Project: {settings_instance.PROJECT_NAME}")
        logger.info(f"Log Level: {settings_instance.LOG_LEVEL}")
        logger.info(f"Movies collection: {settings_instance.MONGODB_COLLECTION}")
        logger.info(f"CORS Origins: {settings_instance.BACKEND_CORS_ORIGINS}")
        # DO NOT log SecretStr values directly
        return settings_instance
    except Exception as e:
        logger.critical(f"CRITICAL ERROR: Failed to load application settings: {e}", exc_info=True)
        raise RuntimeError(f"Could not load settings: {e}")


settings: Settings = get_settings()
