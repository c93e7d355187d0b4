from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STAYEASE_", env_file=".env", extra="ignore")

    # ---- App ----
    app_env: str = "local"  # local|dev|prod
    log_level: str = "INFO"

    # ---- Backend API ----
    api_base_url: str = "http://localhost:9090"
    http_timeout_seconds: float = 20.0

    # ---- Session cookie ----
    jwt_cookie_name: str = "stayease_jwt"

    # ---- Views ----
    refresh_debounce_seconds: float = 0.5
    notification_poll_seconds: float = 30.0

    # ---- Receipts ----
    receipt_dir: str = "."

    def model_post_init(self, __context) -> None:
        if self.refresh_debounce_seconds <= 0:
            raise ValueError("refresh_debounce_seconds must be > 0")
        if self.notification_poll_seconds <= 0:
            raise ValueError("notification_poll_seconds must be > 0")

        env = (self.app_env or "local").strip().lower()
        if env in ("prod", "production") and "localhost" in self.api_base_url:
            raise ValueError("api_base_url points at localhost in prod")


settings = Settings()
