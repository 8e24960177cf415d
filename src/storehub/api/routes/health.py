"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...persistence.sync import StorageSync
from ..dependencies import get_storage_sync

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/storage", status_code=status.HTTP_200_OK)
def check_storage(sync: StorageSync = Depends(get_storage_sync)) -> dict:
    """Report where the system document lives and whether the remote row is reachable."""
    if sync.remote is None:
        return {
            "mode": "local",
            "configured": True,
            "path": str(sync.local.path),
            "localCopy": sync.local.exists(),
        }

    try:
        updated_at = sync.remote.last_updated()
    except ConnectionError as exc:
        return {
            "mode": "supabase",
            "configured": False,
            "message": str(exc),
            "localCopy": sync.local.exists(),
        }
    except Exception as exc:
        return {
            "mode": "supabase",
            "configured": True,
            "connected": False,
            "error": str(exc),
            "localCopy": sync.local.exists(),
        }
    return {
        "mode": "supabase",
        "configured": True,
        "connected": True,
        "updatedAt": updated_at,
        "localCopy": sync.local.exists(),
    }
