from functools import lru_cache
from typing import Optional

from pydantic import PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    
    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """
    
    # Environment
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    
    # Application
    app_name: str = "Cimet's URL Shortener"
    app_version: str = "1.0.0"
    contact_email: str = "tech@cimet.com.au"
    
    # Shortener
    host_url: str = "http://127.0.0.1:8000"  # Prefix for POST / results
    short_domain: str = "cm8.me"  # Prefix for /shorten results (no scheme)
    api_token: str = ""  # Empty token rejects every authenticated request
    slug_length: int = 7
    max_slug_attempts: Optional[PositiveInt] = None  # None = retry until a free slug is found
    
    # Reachability probe for /shorten
    probe_enabled: bool = True
    probe_timeout: Optional[float] = None  # Seconds, None = requests default
    
    # Key-value backend
    kv_backend: str = "memory"  # Options: "memory", "redis", "sql"
    kv_namespace: str = "CM8ME_KV"
    redis_url: str = "redis://localhost:6379/0"
    database_url: str = "sqlite:///./slugstore.db"
    list_limit: int = 1000  # Default page size for /keys/list
    
    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    """Settings instance, cached so .env is read once. Override in tests."""
    return Settings()
