from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    bot_token: str = Field(..., alias="BOT_TOKEN")

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    default_people: int = Field(2, alias="DEFAULT_PEOPLE")
    min_people: int = Field(2, alias="MIN_PEOPLE", ge=1)
    max_people: int = Field(20, alias="MAX_PEOPLE", ge=2)

    currency_symbol: str = Field("₹", alias="CURRENCY_SYMBOL")


settings = Settings()
