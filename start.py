#!/usr/bin/env python3
"""
Start the Maker Wealth API.

PORT (set by most hosting platforms) overrides APP_PORT from .env.
"""
import os

if __name__ == "__main__":
    import uvicorn
    from core.config import settings

    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=int(os.getenv("PORT", settings.app_port)),
        log_level=settings.log_level.lower(),
    )
