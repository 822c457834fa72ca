from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Security: Read from .env, never hardcode keys here
    OPENAI_API_KEY: str | None = None # Only needed for LLM triage
    OPENAI_MODEL: str = "gpt-4o"

    # Generation Parameters
    LLM_TEMPERATURE: float = 0.0

    # How free text is routed before the keyword rules answer it
    FREE_TEXT_TRIAGE: Literal["keywords", "llm"] = "keywords"

    # Chat Store Configuration
    CHAT_STORE: Literal["memory", "sql"] = "memory"
    DATABASE_URL: str = "sqlite:///./smarthome_support.db"

    LOG_LEVEL: str = "INFO"

    # Loads from a .env file in the root directory
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

# Singleton instance
settings = Settings()
