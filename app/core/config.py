from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "VetKlinik AI API"
    app_env: str = "development"
    app_version: str = "1.0.2"

    # Gemini key — optional so the health and preflight routes work without it
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-1.5-flash-latest"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_timeout_seconds: float = 30.0

    # Which prompt/sampling/safety profile POST requests use
    analysis_profile: Literal["analysis", "diagnostic", "drug_extraction"] = "analysis"

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()


def get_settings() -> Settings:
    return settings
