from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Booch Tracker API"
    api_prefix: str = "/api/v1"
    database_url: str = "sqlite:///./boochtracker.db"
    auto_create_tables: bool = False
    log_level: str = "INFO"

    seed_default_admin: bool = False
    default_admin_username: str = "admin"
    default_admin_email: str = "admin@boochtracker.local"
    default_admin_password: str = "change-me-admin"

    jwt_secret_key: str = "change-me-in-env"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    password_hash_iterations: int = 120000

    ai_provider: str = "rules"
    ai_llm_base_url: str | None = None
    ai_llm_api_key: str | None = None
    ai_llm_model: str | None = None
    ai_llm_timeout_seconds: int = 20
    ai_rate_limit_max_requests: int = 10
    ai_rate_limit_window_seconds: int = 60

    correlation_window_seconds: int = 60

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
