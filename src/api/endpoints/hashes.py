from collections.abc import Awaitable, Callable, Iterable

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from src.services.hash_store import HashStore


def _make_hash_endpoint(key: str) -> Callable[[Request], Awaitable[PlainTextResponse]]:
    async def get_image_hash(request: Request) -> PlainTextResponse:
        store: HashStore = request.app.state.hash_store
        return PlainTextResponse(store.get(key))

    get_image_hash.__name__ = f"get_{key}_hash"
    return get_image_hash


def build_router(keys: Iterable[str]) -> APIRouter:
    """One ``GET /<key>`` route per configured image key."""
    router = APIRouter()
    for key in keys:
        router.add_api_route(
            f"/{key}",
            _make_hash_endpoint(key),
            methods=["GET"],
            response_class=PlainTextResponse,
            name=f"{key}_hash",
        )
    return router
