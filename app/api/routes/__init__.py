from __future__ import annotations

from app.api.routes.health import router as health_router
from app.api.routes.stocks import router as stocks_router

__all__ = ["health_router", "stocks_router"]
