"""
Configuration for the analysis service.

Values come from the environment (or a local .env file).
"""
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

DEFAULT_MODELS = "gemini-1.5-flash-latest,gemini-1.5-flash,gemini-1.5-flash-lite,gemini-1.5-nano"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    GEMINI_API_KEY: Optional[str] = Field(default=None)
    # Ranked by cost, most economical first
    GEMINI_MODELS: str = Field(default=DEFAULT_MODELS)
    GEMINI_API_BASE: str = Field(default="https://generativelanguage.googleapis.com/v1beta")
    MODEL_TIMEOUT_SECONDS: float = Field(default=30.0)

    # "gemini" calls the provider, "offline" uses the rule-based generator only
    ANALYSIS_ENGINE: str = Field(default="gemini")

    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="text")

    @property
    def model_candidates(self) -> List[str]:
        return [m.strip() for m in self.GEMINI_MODELS.split(",") if m.strip()]


def get_settings() -> Settings:
    return Settings()
