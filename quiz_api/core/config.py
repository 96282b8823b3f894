from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ENVIRONMENT: str = "development"
    PROJECT_NAME: str = "Scenario Quiz API"
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = "sqlite:///./quiz.db"
    DATABASE_ECHO: bool = False
    AUTO_CREATE_TABLES: bool = True

    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Quiz configuration
    QUIZ_DEFAULT_LIMIT: int = 10
    QUIZ_MAX_LIMIT: int = 100
    RESULT_TITLE: str = "Survivor"
    RESULT_FEEDBACK: str = "You made it through!"
    FEEDBACK_MAX_LENGTH: int = 255

    # Azure OpenAI Configuration (attempt feedback)
    FEEDBACK_ENABLED: bool = False
    AOAI_ENDPOINT: str = ""
    AOAI_API_KEY: str = ""
    AOAI_API_VERSION: str = "2024-02-01"
    AOAI_DEPLOY_GPT4O_MINI: str = "gpt-4o-mini"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def feedback_configured(self) -> bool:
        return bool(self.FEEDBACK_ENABLED and self.AOAI_ENDPOINT and self.AOAI_API_KEY)


def get_settings() -> Settings:
    """Build settings from the environment and .env file"""
    return Settings()
