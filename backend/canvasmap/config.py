"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    miro_oauth_token: str = ""
    miro_api_base_url: str = "https://api.miro.com/v2"
    canvasmap_env: str = "development"
    canvasmap_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Remote canvas transport
    miro_page_size: int = 50  # remote accepts 10..50
    miro_http_timeout: float = 30.0

    # Request-boundary timeout for a whole command (None = unbounded)
    command_timeout: float | None = None

    # Longest side of PNG spatial maps
    raster_max_size: int = 2048

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
