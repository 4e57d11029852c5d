"""Drug interaction and pregnancy category endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query, status

from pharma_core.services.data_context import DataContext, get_context
from pharma_core.services.safety_service import NO_INTERACTION_MESSAGE, NO_PREGNANCY_DATA_MESSAGE

router = APIRouter(tags=["safety"])


@router.get("/drug-interactions")
def drug_interactions(
    drug1: str = Query(default=""),
    drug2: str = Query(default=""),
    context: DataContext = Depends(get_context),
) -> Dict[str, Any]:
    first = drug1.strip()
    second = drug2.strip()
    if not first:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="At least one drug name is required")

    if not second:
        return {"interactions": context.safety.interactions_for(first)}

    interaction = context.safety.interaction_between(first, second)
    if interaction is None:
        return {"message": NO_INTERACTION_MESSAGE}
    return {"interaction": interaction}


@router.get("/pregnancy-categories")
def pregnancy_categories(
    drug: str = Query(default=""),
    context: DataContext = Depends(get_context),
) -> Dict[str, Any]:
    name = drug.strip()
    if not name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Drug name is required")

    result = context.safety.pregnancy_category(name)
    if result is None:
        return {"message": NO_PREGNANCY_DATA_MESSAGE, "categories": dict(context.safety.category_descriptions)}
    return {"result": result}
