from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "ATM Ledger API"
    database_url: str = "sqlite:///atm_ledger.db"
    log_level: str = "INFO"
    backend: Literal["memory", "sql"] = "memory"
    allow_cross_customer_transfers: bool = False
    seed_demo_data: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="LEDGER_",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
