# app/config.py
"""
Application configuration.

Loads settings from environment variables and an optional .env file.
"""
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the products API.

    Attributes:
        port: TCP port the server listens on (env PORT).
        api_key: Shared secret for write operations (env API_KEY). When unset,
            every write is rejected.
        seed_demo_data: Start the store with the demo Laptop/Smartphone records.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    project_name: str = "Products API"
    version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 3000
    api_key: Optional[str] = None
    log_level: str = "INFO"
    seed_demo_data: bool = True
    cors_origins: List[str] = ["*"]


settings = Settings()
