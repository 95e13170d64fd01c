from collections.abc import Iterable

from fastapi import APIRouter

from src.api.endpoints import hashes


def build_api_router(keys: Iterable[str]) -> APIRouter:
    router = APIRouter()
    router.include_router(hashes.build_router(keys), tags=["hashes"])
    return router
