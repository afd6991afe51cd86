from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    APP_NAME: str = "String Analyzer Service"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Logging configuration used by string_analyzer.logging
    LOG_LEVEL: str = "INFO"
    CONSOLE_LOG_LEVEL: str = "INFO"

    CORS_ALLOW_ORIGINS: List[str] = ["*"]


settings = Settings()
