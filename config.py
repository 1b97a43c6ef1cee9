"""Application configuration."""

from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Server settings, loaded from environment variables and an optional .env file.

    PORT, HOST, ENVIRONMENT, DEBUG and PUBLISHED_URL override the defaults.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    agent_name: str = "YT-Tag-Generator"
    version: str = "1.0.0"

    host: str = "0.0.0.0"
    port: int = 3000

    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False

    # Public WebSocket URL when deployed behind a proxy
    published_url: Optional[str] = None

    @property
    def websocket_url(self) -> str:
        if self.environment == "production" and self.published_url:
            return self.published_url
        return f"ws://localhost:{self.port}"
