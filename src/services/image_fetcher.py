import httpx
import structlog
from resilient_httpx import AllProxiesExhausted, AsyncProxyHttpClient, MaxRetriesExceeded, RetryPolicy

from src.config import settings
from src.core.exceptions import FetchError

logger = structlog.get_logger()

_client: AsyncProxyHttpClient | None = None

_TRANSPORT_ERRORS = (httpx.HTTPError, httpx.InvalidURL, MaxRetriesExceeded, AllProxiesExhausted)


def get_http_client() -> AsyncProxyHttpClient:
    global _client
    if _client is None:
        # A single attempt per request: the next refresh cycle is the retry.
        _client = AsyncProxyHttpClient(
            proxies=settings.proxies or None,
            proxy_strategy=settings.proxy_strategy,
            retry=RetryPolicy(max_attempts=1),
            timeout=settings.fetch_timeout,
            headers={"User-Agent": f"{settings.app_name}/1.0"},
            fallback_to_direct=True,
        )
    return _client


async def fetch_image(url: str) -> bytes:
    """Download the full body at ``url``.

    Raises FetchError on transport failures, non-success statuses and
    failures while reading the body.
    """
    client = get_http_client()
    try:
        async with client.stream("GET", url) as response:
            response.raise_for_status()
            try:
                chunks = [chunk async for chunk in response.aiter_bytes()]
            except httpx.HTTPError as e:
                raise FetchError(url, f"error reading response body: {e}") from e
    except FetchError:
        raise
    except _TRANSPORT_ERRORS as e:
        raise FetchError(url, f"error fetching image: {e}") from e
    except Exception as e:
        # e.g. UnicodeError from IDNA encoding of the host name
        raise FetchError(url, f"unexpected error fetching image: {e!r}") from e
    return b"".join(chunks)


async def close_client() -> None:
    global _client
    if _client:
        await _client.aclose()
        _client = None
