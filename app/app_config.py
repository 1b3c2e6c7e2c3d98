from pydantic import BaseModel

from app.shared.config import config


class AppEnvironConfig(BaseModel):
    # Public demo switch: when enabled, the provider is stubbed and no network calls are made.
    DEMO_MODE: bool = (config.get("DEMO_MODE") or "false").strip().lower() == "true"

    # Mux configuration
    MUX_TOKEN_ID: str | None = (config.get("MUX_TOKEN_ID") or "").strip() or None
    MUX_TOKEN_SECRET: str | None = (config.get("MUX_TOKEN_SECRET") or "").strip() or None

    # Caller authentication; tokens are decoded without verification when unset
    FUNCTIONS_JWT_SECRET: str | None = (config.get("FUNCTIONS_JWT_SECRET") or "").strip() or None


_app_environ_config = AppEnvironConfig()


def get_app_environ_config() -> AppEnvironConfig:
    return _app_environ_config
