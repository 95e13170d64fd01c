import asyncio
import contextlib
import sys
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from src.api.router import build_api_router
from src.config import settings
from src.core.exceptions import ConfigError, TLSSetupError
from src.core.logging import configure_logging
from src.core.tls import load_tls_context
from src.middleware.access_log import AccessLogMiddleware
from src.services import image_fetcher
from src.services.hash_store import HashStore
from src.services.image_sources import load_image_sources
from src.services.refresher import Refresher

logger = structlog.get_logger()


def _log_refresher_exit(task: asyncio.Task[None]) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("refresher_crashed", error=repr(exc), exc_info=exc)


def create_app(
    sources: Mapping[str, str],
    store: HashStore | None = None,
    refresh_interval: float | None = None,
) -> FastAPI:
    hash_store = store if store is not None else HashStore(sources)
    refresher = Refresher(
        sources,
        hash_store,
        refresh_interval if refresh_interval is not None else settings.refresh_interval,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        task = asyncio.create_task(refresher.run(), name="image-refresher")
        task.add_done_callback(_log_refresher_exit)
        try:
            yield
        finally:
            task.cancel()
            try:
                # A crash has already been reported by _log_refresher_exit.
                with contextlib.suppress(asyncio.CancelledError, Exception):
                    await task
            finally:
                await image_fetcher.close_client()
                logger.info("refresher_stopped")

    app = FastAPI(
        title=settings.app_name,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.hash_store = hash_store
    app.state.refresher = refresher
    app.add_middleware(AccessLogMiddleware)
    app.include_router(build_api_router(hash_store.keys))
    return app


def main() -> None:
    configure_logging(settings.log_level)

    try:
        sources = load_image_sources(settings.image_config_path)
    except ConfigError as e:
        logger.error("config_load_failed", error=str(e))
        sys.exit(1)

    try:
        load_tls_context(settings.tls_cert_path, settings.tls_key_path)
    except TLSSetupError as e:
        logger.error("tls_setup_failed", error=str(e))
        sys.exit(1)

    app = create_app(sources)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        ssl_certfile=settings.tls_cert_path,
        ssl_keyfile=settings.tls_key_path,
        log_config=None,
        access_log=False,
    )


if __name__ == "__main__":
    main()
