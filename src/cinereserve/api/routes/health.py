"""Health check endpoint."""

from fastapi import APIRouter

from cinereserve import __version__

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """
    Health check endpoint.

    Returns:
        Status message and the running API version
    """
    return {"status": "ok", "version": __version__}
