from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """Process settings, read from ``CART_PRICING_*`` environment variables."""

    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    trace_enabled: bool = True

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        defaults = Settings()

        raw_port = env.get("CART_PRICING_PORT", str(defaults.port))
        try:
            port = int(raw_port)
        except ValueError:
            raise ValueError(f"CART_PRICING_PORT must be an integer: {raw_port!r}") from None
        if not 0 < port < 65536:
            raise ValueError(f"CART_PRICING_PORT out of range: {port}")

        log_level = env.get("CART_PRICING_LOG_LEVEL", defaults.log_level).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"CART_PRICING_LOG_LEVEL is not a logging level: {log_level!r}")

        raw_trace = env.get("CART_PRICING_TRACE", "1").strip().lower()
        if raw_trace in _TRUE:
            trace_enabled = True
        elif raw_trace in _FALSE:
            trace_enabled = False
        else:
            raise ValueError(f"CART_PRICING_TRACE must be a boolean: {raw_trace!r}")

        return Settings(
            host=env.get("CART_PRICING_HOST", defaults.host),
            port=port,
            log_level=log_level,
            trace_enabled=trace_enabled,
        )
