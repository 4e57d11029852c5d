"""UAE drug registry endpoints."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query, status

from pharma_core.services.data_context import DataContext, get_context
from pharma_core.services.drug_records import as_detail, as_search_result, as_uae_listing
from pharma_core.services.drug_registry_service import DrugRegistryUnavailableError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["drugs"])


@router.get("/drug-service/search")
async def search_drugs(
    query: str = Query(default=""),
    category: str = Query(default=""),
    limit: int = Query(default=20, ge=1, le=500),
    context: DataContext = Depends(get_context),
) -> Dict[str, Any]:
    try:
        drugs = await context.registry.search(query.strip(), category=category.strip(), limit=limit)
    except DrugRegistryUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc

    results = [as_search_result(drug) for drug in drugs]
    return {"results": results, "total": len(results), "query": query}


@router.get("/drug-service/drugs/{drug_id}")
async def get_drug(drug_id: str, context: DataContext = Depends(get_context)) -> Dict[str, Any]:
    try:
        drug = await context.registry.get(drug_id)
    except DrugRegistryUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc

    if drug is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Drug not found")
    return as_detail(drug)


@router.get("/drug-service/categories")
async def categories(context: DataContext = Depends(get_context)) -> Dict[str, Any]:
    try:
        return {"categories": await context.registry.categories()}
    except DrugRegistryUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc


@router.get("/uae-drugs")
def uae_drugs(
    q: str = Query(default=""),
    limit: int = Query(default=10, ge=1, le=500),
    context: DataContext = Depends(get_context),
) -> Dict[str, Any]:
    term = q.strip()
    if len(term) < 2:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please provide at least 2 characters for search",
        )
    if not len(context.registry):
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Drug database not available")

    results = [as_uae_listing(drug) for drug in context.registry.listing(term, limit=limit)]
    return {
        "results": results,
        "total": len(results),
        "query": q,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
