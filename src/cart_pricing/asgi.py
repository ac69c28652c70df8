from __future__ import annotations

from cart_pricing.bootstrap import create_asgi_app

app = create_asgi_app()
