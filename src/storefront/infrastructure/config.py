"""Deployment settings, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from storefront.domain.model.value_objects import DEFAULT_CURRENCY

GATEWAYS = ("sandbox", "razorpay")


class ConfigurationError(Exception):
    """The environment does not describe a usable deployment."""


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    currency: str = DEFAULT_CURRENCY
    gateway: str = "sandbox"
    razorpay_key_id: str | None = None
    razorpay_key_secret: str | None = None
    razorpay_base_url: str = "https://api.razorpay.com"
    gateway_timeout: float = 10.0
    sandbox_secret: str = "sandbox-secret"

    @staticmethod
    def from_env(environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        gateway = env.get("STOREFRONT_GATEWAY", "sandbox").lower()
        if gateway not in GATEWAYS:
            raise ConfigurationError(
                f"Unknown payment gateway '{gateway}' (expected one of {', '.join(GATEWAYS)})"
            )

        key_id = env.get("RAZORPAY_KEY_ID") or None
        key_secret = env.get("RAZORPAY_KEY_SECRET") or None
        if gateway == "razorpay" and not (key_id and key_secret):
            raise ConfigurationError(
                "STOREFRONT_GATEWAY=razorpay requires RAZORPAY_KEY_ID and RAZORPAY_KEY_SECRET"
            )

        try:
            timeout = float(env.get("STOREFRONT_GATEWAY_TIMEOUT", "10"))
        except ValueError as exc:
            raise ConfigurationError("STOREFRONT_GATEWAY_TIMEOUT must be a number of seconds") from exc

        return Settings(
            data_dir=Path(env.get("STOREFRONT_DATA_DIR", "data")).resolve(),
            currency=env.get("STOREFRONT_CURRENCY", DEFAULT_CURRENCY).upper(),
            gateway=gateway,
            razorpay_key_id=key_id,
            razorpay_key_secret=key_secret,
            razorpay_base_url=env.get("RAZORPAY_BASE_URL", "https://api.razorpay.com").rstrip("/"),
            gateway_timeout=timeout,
            sandbox_secret=env.get("STOREFRONT_SANDBOX_SECRET", "sandbox-secret"),
        )
