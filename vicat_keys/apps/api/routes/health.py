"""Liveness route."""

from fastapi import APIRouter

router = APIRouter()


@router.get("/alive")
def alive_check() -> dict[str, str]:
    """Unauthenticated liveness probe."""
    return {"status": "ok", "message": "Key API is alive."}


__all__ = ["router"]
