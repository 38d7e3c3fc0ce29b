from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Required from environment (.env / deployment secrets)
    database_url: str
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 12  # 12 hours
    app_env: str = "development"  # development, staging, production

    # CORS origins as comma-separated values
    # Example: "https://portal.example.com,https://admin.example.com"
    cors_allow_origins: str = "http://localhost:5173"

    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # Search engine endpoint; {query} is replaced with the percent-encoded query
    search_engine_url: str = "https://www.google.com/search?q={query}"

    # Delay between consecutive URL openings (popup blockers drop bursts)
    open_stagger_ms: int = 100

    # Upper bound on names accepted in a single search request
    max_names_per_search: int = 500

    # Request guards
    rate_limit_auth_per_min: int = 20
    rate_limit_search_per_min: int = 30

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
