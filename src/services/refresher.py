import asyncio
import hashlib
from collections.abc import Mapping

import structlog

from src.core.exceptions import FetchError
from src.services import image_fetcher
from src.services.hash_store import HashStore

logger = structlog.get_logger()


def compute_image_hash(image_bytes: bytes) -> str:
    return hashlib.sha256(image_bytes).hexdigest()


class Refresher:
    """Keeps a HashStore in step with the content of the remote images."""

    def __init__(self, sources: Mapping[str, str], store: HashStore, interval: float) -> None:
        self.sources = sources
        self.store = store
        self.interval = interval

    async def refresh_once(self) -> int:
        """Fetch and hash every source once; returns how many keys succeeded.

        A failed key keeps whatever hash it had before.
        """
        succeeded = 0
        for key, url in self.sources.items():
            try:
                image_bytes = await image_fetcher.fetch_image(url)
            except FetchError as e:
                logger.error("image_fetch_failed", key=key, url=url, error=e.detail)
                continue
            except Exception:
                logger.exception("image_refresh_failed", key=key, url=url)
                continue

            image_hash = compute_image_hash(image_bytes)
            changed = self.store.set(key, image_hash)
            succeeded += 1
            if changed:
                logger.info("image_hash_updated", key=key, hash=image_hash)

        never_fetched = [key for key, value in self.store.snapshot().items() if not value]
        logger.info(
            "refresh_cycle_completed",
            succeeded=succeeded,
            total=len(self.sources),
            never_fetched=never_fetched,
        )
        return succeeded

    async def run(self) -> None:
        logger.info("refresher_started", keys=list(self.sources), interval=self.interval)
        while True:
            await self.refresh_once()
            await asyncio.sleep(self.interval)
