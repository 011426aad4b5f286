from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    ai_api_key: Optional[str] = None
    ai_api_url: Optional[str] = None
    ai_api_timeout: float = Field(120.0, gt=0)

    host: str = "0.0.0.0"
    port: int = 8080

    cors_allow_origins: str = "http://localhost:3000"
    prompt_char_limit: Optional[int] = Field(None, gt=0)
    log_level: str = "INFO"

    @field_validator("ai_api_key", "ai_api_url", mode="before")
    @classmethod
    def blank_as_missing(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, value: str) -> str:
        return (value or "INFO").upper()

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    try:
        return Settings()
    except Exception as exc:
        raise RuntimeError("Failed to load application settings. Check your .env file.") from exc
