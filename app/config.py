from enum import Enum

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PREPPER_")

    env: Env = Env.local
    host: str = "127.0.0.1"
    port: int = 4000
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]
    mealdb_url: str = "https://www.themealdb.com/api/json/v1/1/"
    mealdb_timeout: float = 20
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("PREPPER_OPENAI_API_KEY", "OPENAI_API_KEY"),
    )
    openai_model: str = "gpt-4o-mini"
    chat_temperature: float = 0.7
    chat_max_tokens: int = 500

    @property
    def ai_enabled(self) -> bool:
        return bool(self.openai_api_key)
