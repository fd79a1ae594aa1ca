import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from autoparts_hub.container import get_catalog_cache
from autoparts_hub.core.config import settings
from autoparts_hub.core.middleware import apply_cors, register_exception_handlers
from autoparts_hub.routes import health_router, v1_router

logger = logging.getLogger(__name__)

# Background catalog refresh loop
_refresh_task: Optional[asyncio.Task] = None


async def _stop_refresh_task() -> None:
    """Cancel the catalog refresh loop and wait for it to finish."""
    global _refresh_task

    if _refresh_task is None:
        return
    _refresh_task.cancel()
    try:
        await _refresh_task
    except asyncio.CancelledError:
        pass
    logger.info("Catalog refresh loop stopped")
    _refresh_task = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan event handler.

    On startup:
    - Start the periodic catalog refresh (first fetch runs immediately)

    On shutdown:
    - Cancel the refresh loop
    """
    global _refresh_task

    logger.info("=== Auto-Parts Order Hub Starting ===")

    if settings.auto_start_catalog_refresh:
        catalog = get_catalog_cache()
        _refresh_task = asyncio.create_task(
            catalog.run_periodic_refresh(settings.catalog_refresh_seconds)
        )
        logger.info(
            f"Catalog refresh every {settings.catalog_refresh_seconds}s from {settings.catalog_url}"
        )
    else:
        logger.info("Catalog auto-refresh disabled (AUTO_START_CATALOG_REFRESH=false)")

    logger.info("=== Auto-Parts Order Hub Ready ===")

    yield

    logger.info("=== Auto-Parts Order Hub Shutting Down ===")
    await _stop_refresh_task()
    logger.info("Shutdown complete")


app = FastAPI(title="Auto-Parts Order Hub", lifespan=lifespan)
logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")

apply_cors(app)
register_exception_handlers(app)

app.include_router(health_router)
app.include_router(v1_router)
