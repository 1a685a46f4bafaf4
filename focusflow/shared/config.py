from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _csv(name: str, default: str = "") -> tuple[str, ...]:
    value = _env(name, default) or ""
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    postgres_dsn: str
    jwt_secret: str
    jwt_audience: str
    stripe_secret_key: str
    stripe_webhook_secret: str
    stripe_price_id: str
    premium_price_cents: int
    premium_currency: str
    app_url: str
    openai_api_key: str
    openai_model: str
    openai_timeout_seconds: float
    openai_max_tokens: int
    log_level: str
    cors_origins: tuple[str, ...]

    @property
    def stripe_success_url(self) -> str:
        return f"{self.app_url}/billing?success=true"

    @property
    def stripe_cancel_url(self) -> str:
        return f"{self.app_url}/billing?canceled=true"

    @property
    def stripe_portal_return_url(self) -> str:
        return f"{self.app_url}/billing"


def get_settings() -> Settings:
    return Settings(
        postgres_dsn=_env("POSTGRES_DSN", ""),
        jwt_secret=_env("JWT_SECRET", ""),
        jwt_audience=_env("JWT_AUDIENCE", "authenticated"),
        stripe_secret_key=_env("STRIPE_SECRET_KEY", ""),
        stripe_webhook_secret=_env("STRIPE_WEBHOOK_SECRET", ""),
        stripe_price_id=_env("STRIPE_PRICE_ID", ""),
        premium_price_cents=int(_env("PREMIUM_PRICE_CENTS", "999")),
        premium_currency=_env("PREMIUM_CURRENCY", "usd"),
        app_url=(_env("APP_URL", "http://localhost:5000") or "").rstrip("/"),
        openai_api_key=_env("OPENAI_API_KEY", ""),
        openai_model=_env("OPENAI_MODEL", "gpt-4o-mini"),
        openai_timeout_seconds=float(_env("OPENAI_TIMEOUT_SECONDS", "30")),
        openai_max_tokens=int(_env("OPENAI_MAX_TOKENS", "1000")),
        log_level=(_env("LOG_LEVEL", "INFO") or "INFO").upper(),
        cors_origins=_csv("CORS_ORIGINS", "*"),
    )
