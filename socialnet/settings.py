import re

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=True)

    ENVIRONMENT: str = "development"

    # Database settings
    DB_USER: str = "socialnet"
    DB_PASSWORD: SecretStr = SecretStr("")
    DB_HOST: str = "socialnet-db"
    DB_PORT: int = 5432
    DB_NAME: str = "socialnet"
    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True

    # Full URL override (e.g. sqlite+aiosqlite:///:memory: for local runs)
    DATABASE_URL_OVERRIDE: str | None = None

    # Create tables on startup instead of relying on external migrations
    DB_CREATE_TABLES: bool = True

    # Database initialization settings
    DB_INIT_RETRY_INTERVAL: int = 2
    DB_INIT_MAX_RETRIES: int = 5

    @property
    def DATABASE_URL(self) -> str:
        """Construct the database URL from individual components."""
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE

        password = self.DB_PASSWORD.get_secret_value()
        return (
            f"postgresql+asyncpg://{self.DB_USER}:{password}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    # Redis settings
    REDIS_IP: str = "localhost"
    REDIS_PORT: int = 6379
    MAIN_REDIS_DB: int = 1

    # Redis connection pool settings
    REDIS_MAX_CONNECTIONS: int = 50
    REDIS_SOCKET_TIMEOUT: int = 5
    REDIS_CONNECT_TIMEOUT: int = 5
    REDIS_HEALTH_CHECK_INTERVAL: int = 30
    REDIS_RETRY_ON_TIMEOUT: bool = True

    # Authentication
    SESSION_COOKIE_NAME: str = "auth_session"
    EXCLUDED_PATHS: re.Pattern = re.compile(
        r"^(/docs|/openapi.json|/health|/metrics)$"
    )

    # Pagination defaults (per feed)
    POSTS_PAGE_SIZE: int = 10
    COMMENTS_PAGE_SIZE: int = 5
    NOTIFICATIONS_PAGE_SIZE: int = 10
    BOOKMARKS_PAGE_SIZE: int = 10
    SEARCH_PAGE_SIZE: int = 10

    # Sidebar widgets
    RECOMMENDATIONS_LIMIT: int = 5
    TRENDING_LIMIT: int = 5
    TRENDING_CACHE_TTL: int = 3 * 60 * 60

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_FILE_PATH: str = "logs/logging_errors.log"


app_settings = Settings()
