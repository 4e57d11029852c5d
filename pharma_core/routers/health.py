from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends

from pharma_core.core.config import settings
from pharma_core.services.data_context import DataContext, get_context

router = APIRouter(tags=["health"])


@router.get("/health")
def health(context: DataContext = Depends(get_context)) -> Dict[str, Any]:
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "application": {
            "name": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
            "dataLoaded": context.health(),
        },
    }
