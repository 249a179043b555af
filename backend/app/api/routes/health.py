"""Operational endpoints: liveness, component health and Prometheus scraping.

- /health: liveness, always 200
- /healthz: component status for the store and the generation backend (503 if degraded)
- /metrics: generation latency, error and fallback series in Prometheus text format
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, generate_latest

from backend.app.api.deps import get_storage
from backend.app.config import Settings, get_settings
from backend.app.db.repositories import Storage

router = APIRouter()


async def check_storage(storage: Storage) -> tuple[bool, str]:
    """Check the entity store answers reads.

    Returns:
        (is_ok, status_message)
    """
    try:
        storage.get_all_documents()
        return (True, "ok")
    except Exception as e:
        return (False, f"error: {type(e).__name__}")


async def check_generator(settings: Settings) -> tuple[bool, str]:
    """Report which generation backend is configured.

    Returns:
        (is_ok, status_message)
    """
    api_key = settings.openai_api_key
    if api_key and api_key.get_secret_value():
        return (True, f"openai:{settings.openai_model}")
    return (True, "stub")


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz")
async def healthz(storage: Annotated[Storage, Depends(get_storage)]) -> JSONResponse:
    """Health check endpoint with component status."""
    settings = get_settings()

    storage_ok, storage_status = await check_storage(storage)
    generator_ok, generator_status = await check_generator(settings)

    healthy = storage_ok and generator_ok

    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ok" if healthy else "degraded",
            "components": {
                "storage": storage_status,
                "generator": generator_status,
            },
        },
    )


@router.get("/metrics", tags=["metrics"])
async def metrics() -> Response:
    """Scrape the process-wide registry, including the generation_* series."""
    return Response(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)
