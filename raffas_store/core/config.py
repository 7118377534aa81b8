"""Storefront Configuration"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Raffa's Treats on Stix"
    debug: bool = True
    host: str = "0.0.0.0"
    port: int = 8000

    # Hosted backend
    backend_url: Optional[str] = None
    backend_anon_key: Optional[str] = None
    # "seed" serves the bundled menu, "backend" loads it at startup
    catalog_source: Literal["seed", "backend"] = "seed"

    # Checkout handoff
    messenger_page_id: str = "61574906107219"
    currency_symbol: str = "₱"

    # Sessions
    session_max_age_hours: int = 24

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @property
    def backend_configured(self) -> bool:
        """Check if hosted backend credentials are configured"""
        return all([self.backend_url, self.backend_anon_key])


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
