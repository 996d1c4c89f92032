from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded once from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    app_env: str = "dev"
    log_level: str = "INFO"

    http_host: str = "0.0.0.0"
    http_port: int = 8000
    cors_allowed_origins: str = "*"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "studyassist"
    db_username: str = "studyassist"
    db_password: str = "secret"

    files_root: str = "/app/files"

    parser_engine: str = "http"
    parser_url: str = "http://localhost:8080/parse"
    parser_timeout_seconds: int = 60
    parser_max_attempts: int = 2
    parser_retry_delay_seconds: float = 0.8

    completion_provider: str = "openai"
    completion_api_key: str = ""
    completion_base_url: str = ""
    completion_model_name: str = "gpt-4o-mini"
    completion_timeout_seconds: int = 60
    completion_temperature: float = 0.7
    completion_max_tokens: int = 2000

    ocr_model_name: str = "gpt-4o-mini"
    ocr_temperature: float = 0.2
    ocr_max_tokens: int = 2000

    content_max_chars: int = 50_000
    history_window: int = 10
