from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./resume_builder.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800
    DB_DEBUG: bool = False

    API_PORT: int = 5002
    ENVIRONMENT: str = "development"
    ALLOWED_ORIGINS: str = "http://localhost:3000"

    TOKEN_KEY: str = "change-me-in-production"
    TOKEN_ISSUER: str = "resume_builder_api"
    TOKEN_EXPIRE_HOURS: int = 24
    USER_TOKEN_AUDIENCE: str = "users"
    ADMIN_TOKEN_AUDIENCE: str = "admins"
    BCRYPT_ROUNDS: int = 12
    CHECK_ACCOUNT_STATUS: bool = True

    DEFAULT_PAGE_LIMIT: int = 20
    DEFAULT_PAGE_INDEX: int = 1
    MAX_PAGE_LIMIT: int = 100

    APP_VERSION: str = "0.3.0"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def cors_origins(self) -> List[str]:
        if not self.is_production:
            return ["*"]
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]


settings = Settings()
