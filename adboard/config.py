from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql+asyncpg://postgres:postgres@db:5432/postgres"
    APP_ENV: str = "development"
    DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Listing rules
    PAGE_WINDOW: int = 10
    MAX_LINKS: int = 3

    # Report a missing advertisement on /getone as 404 instead of 500
    NOT_FOUND_AS_404: bool = False

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
