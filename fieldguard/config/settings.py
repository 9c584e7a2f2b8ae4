from pydantic_settings import BaseSettings, SettingsConfigDict

from fieldguard.validation.categories import FileCategory


class Settings(BaseSettings):
    """Validator configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "fieldguard"
    db_username: str = "fieldguard"
    db_password: str = "secret"
    db_connect_timeout: int = 5
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10

    # JSON objects, e.g. ERROR_MESSAGES='{"required": "Please fill this in"}'
    error_messages: dict[str, str] = {}
    file_categories: dict[str, FileCategory] = {}
