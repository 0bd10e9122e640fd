"""Application settings.

Settings are read from the environment once, validated, and handed to the
application factory. Nothing below the factory reads ``os.environ`` for
payment or store configuration.
"""

import os
from collections.abc import Mapping
from typing import Literal

from protean.exceptions import ConfigurationError
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

# Environment variable names, keyed by settings field
_ENV_VARS = {
    "environment": "PROTEAN_ENV",
    "database_url": "DATABASE_URL",
    "payment_gateway": "PAYMENT_GATEWAY",
    "stripe_secret_key": "STRIPE_SK",
    "stripe_webhook_secret": "STRIPE_WEBHOOK_SECRET",
    "site_url": "SITE_URL",
    "store_name": "STORE_NAME",
    "currency": "STORE_CURRENCY",
    "log_level": "LOG_LEVEL",
    "log_dir": "LOG_DIR",
}


class StorefrontSettings(BaseModel):
    """Validated, immutable runtime configuration."""

    model_config = {"frozen": True}

    environment: Literal["development", "test", "staging", "production"] = "development"
    database_url: str | None = None
    payment_gateway: Literal["fake", "stripe"] = "fake"
    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""
    site_url: str = "http://localhost:3000"
    store_name: str = "Storefront"
    currency: str = Field(default="usd", min_length=3, max_length=3)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | None = None
    log_dir: str | None = None

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @model_validator(mode="after")
    def stripe_requires_secrets(self):
        if self.payment_gateway == "stripe":
            missing = [
                name
                for name in ("stripe_secret_key", "stripe_webhook_secret")
                if not getattr(self, name)
            ]
            if missing:
                raise ValueError(f"Stripe gateway requires {', '.join(missing)}")
        return self

    @model_validator(mode="after")
    def production_requires_real_gateway(self):
        if self.environment == "production" and self.payment_gateway == "fake":
            raise ValueError("The fake payment gateway cannot be used in production")
        return self

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "StorefrontSettings":
        """Build settings from environment variables.

        Raises ``ConfigurationError`` listing every invalid field.
        """
        environ = os.environ if environ is None else environ
        values = {field: environ[var] for field, var in _ENV_VARS.items() if environ.get(var)}
        try:
            return cls(**values)
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or 'settings'}: {error['msg']}"
                for error in exc.errors()
            )
            raise ConfigurationError(f"Invalid storefront settings: {problems}") from exc
