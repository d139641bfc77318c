"""Runtime settings.

Read once from the environment when the process starts and handed to
the composition root; nothing else reads ``os.environ``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from bookstore.domain.model.order import StockPolicy

ENV_PREFIX = "BOOKSTORE_"

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


class ConfigurationError(Exception):
    """A setting is present but unusable."""


@dataclass(frozen=True)
class Settings:

    database_url: str = f"sqlite:///{_DATA_DIR / 'bookstore.db'}"
    stock_policy: StockPolicy = StockPolicy.RESERVE_ON_CREATE
    require_payment_before_delivery: bool = False
    log_level: str = "WARNING"

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        defaults = Settings()

        def get(name: str) -> str | None:
            return env.get(ENV_PREFIX + name)

        database_url = get("DATABASE_URL") or defaults.database_url

        raw_policy = get("STOCK_POLICY")
        if raw_policy is None:
            stock_policy = defaults.stock_policy
        else:
            try:
                stock_policy = StockPolicy(raw_policy.strip().lower())
            except ValueError as exc:
                choices = ", ".join(p.value for p in StockPolicy)
                raise ConfigurationError(
                    f"{ENV_PREFIX}STOCK_POLICY must be one of {choices}, got {raw_policy!r}"
                ) from exc

        raw_require = get("REQUIRE_PAYMENT_BEFORE_DELIVERY")
        if raw_require is None:
            require_payment = defaults.require_payment_before_delivery
        else:
            require_payment = _parse_bool("REQUIRE_PAYMENT_BEFORE_DELIVERY", raw_require)

        log_level = (get("LOG_LEVEL") or defaults.log_level).strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigurationError(f"{ENV_PREFIX}LOG_LEVEL is not a logging level: {log_level!r}")

        return Settings(
            database_url=database_url,
            stock_policy=stock_policy,
            require_payment_before_delivery=require_payment,
            log_level=log_level,
        )


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(f"{ENV_PREFIX}{name} must be a boolean, got {raw!r}")
