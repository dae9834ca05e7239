from typing import List, Optional

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=[".env", "../.env"], env_file_encoding="utf-8", extra="ignore"
    )

    # Status store (Redis). Both values are required before the first read.
    STATUS_STORE_URL: Optional[str] = None
    STATUS_STORE_TOKEN: Optional[SecretStr] = None
    STATUS_KEY: str = "factory:status"
    STORE_SOCKET_TIMEOUT: float = 5.0

    # Web server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ORIGINS: str = "*"  # Comma separated

    # Console dashboard
    DASHBOARD_URL: str = "http://localhost:8000"
    DASHBOARD_POLL_INTERVAL: float = 10.0

    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True  # Set to False for human-readable console output during development

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def store_configured(self) -> bool:
        """True when both store connection parameters are present."""
        token = self.STATUS_STORE_TOKEN.get_secret_value() if self.STATUS_STORE_TOKEN else ""
        return bool(self.STATUS_STORE_URL) and bool(token)


settings = Settings()
