from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # MongoDB URL including the database name, e.g. mongodb://localhost/coffee-tracker
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3100
    debug: bool = False
    cors_origins: list[str] = []
    session_expiration_hours: float = 24  # Entries older than this are removed by the periodic sweep
    cleanup_interval_hours: float = 1  # Delay between periodic sweeps

    model_config = {
        "env_file": [".env"],
        "env_prefix": "COFFEE_TRACKER_",
        "extra": "ignore",
    }
