from __future__ import annotations

import logging
import sys

import uvicorn

from cart_pricing.adapters.inbound.cli import run_cli
from cart_pricing.bootstrap import build_from_settings
from cart_pricing.settings import Settings


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print("usage: cart-pricing '<json>'")
        return 2

    settings = Settings.from_env()
    _configure_logging(settings)
    usecases = build_from_settings(settings)
    return run_cli(usecases.calculate_pricing, argv[0])


def serve() -> None:
    settings = Settings.from_env()
    _configure_logging(settings)
    uvicorn.run(
        "cart_pricing.bootstrap:create_asgi_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    raise SystemExit(main())
