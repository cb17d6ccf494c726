from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    app_name: str = "CosmicForecast"
    app_version: str = "0.1.0"
    app_env: str = "development"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    # Upstream feeds
    nasa_api_key: str = "DEMO_KEY"
    power_base_url: str = "https://power.larc.nasa.gov/api/temporal/daily/point"
    donki_base_url: str = "https://api.nasa.gov/DONKI"
    timeout_connect: float = 5.0
    timeout_read: float = 15.0
    # A failed attempt falls back to mock data straight away
    max_retries: int = 0

    # .env support and prefix for clarity
    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
