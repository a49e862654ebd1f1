from pydantic import model_validator
from pydantic_settings import BaseSettings
from typing import Optional, List

DEV_FALLBACK_SECRET_KEY = "insecure-dev-secret-change-me"

class Settings(BaseSettings):
    PROJECT_NAME: str = "Course Hub"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"

    SECRET_KEY: Optional[str] = None
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: Optional[int] = 60 * 24 * 7  # 7 days
    USING_INSECURE_SECRET: bool = False

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5500",
        "http://127.0.0.1:5500",
    ]

    # Database Configuration
    DATABASE_HOST: Optional[str] = None
    DATABASE_PORT: str = "5432"
    DATABASE_USER: Optional[str] = None
    DATABASE_PASSWORD: Optional[str] = None
    DATABASE_NAME: Optional[str] = None

    DATABASE_URL: str = "sqlite:///./coursehub.db"
    TEST_DATABASE_URL: Optional[str] = None

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    SQL_ECHO: bool = False

    @model_validator(mode="after")
    def _resolve_database_url(self):
        if self.DATABASE_HOST:
            self.DATABASE_URL = (
                f'postgresql://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}'
                f'@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}'
            )
        return self

    @model_validator(mode="after")
    def _require_secret_outside_development(self):
        if self.SECRET_KEY:
            return self
        if not self.is_development:
            raise ValueError(
                f"SECRET_KEY must be set when ENVIRONMENT={self.ENVIRONMENT!r}"
            )
        self.SECRET_KEY = DEV_FALLBACK_SECRET_KEY
        self.USING_INSECURE_SECRET = True
        return self

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() in ("development", "dev", "local", "test")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() in ("production", "prod")

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
