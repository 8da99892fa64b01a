import sys

from pydantic import BaseModel
from pydantic_settings import BaseSettings

_ENV_FILE = None if "pytest" in sys.modules else ".env"


class DefaultUsersSettings(BaseModel):
    """Example accounts created at startup. A blank email or password skips the slot."""

    ADMIN_EMAIL: str = ""
    ADMIN_PASSWORD: str = ""
    READ_ONLY_EMAIL: str = ""
    READ_ONLY_PASSWORD: str = ""


class Settings(BaseSettings):
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = "sqlite+aiosqlite:///./enterprise_directory.db"
    DATABASE_ECHO: bool = False

    JWT_SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 8

    DEFAULT_USERS: DefaultUsersSettings = DefaultUsersSettings()

    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    model_config = {
        "env_file": _ENV_FILE,
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",
        "case_sensitive": True,
    }


settings = Settings()
