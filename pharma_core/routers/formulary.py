"""Daman insurance formulary endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query, status

from pharma_core.services.data_context import DataContext, get_context

router = APIRouter(tags=["formulary"])


@router.get("/daman-service/coverage")
def coverage(
    drug: str = Query(default=""),
    context: DataContext = Depends(get_context),
) -> Dict[str, Any]:
    name = drug.strip()
    if not name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Drug name is required")

    result = context.formulary.coverage(name)
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Medication not found in formulary")
    return result


@router.get("/daman-formulary")
def formulary(
    drug: str = Query(default=""),
    context: DataContext = Depends(get_context),
) -> Dict[str, Any]:
    name = drug.strip()
    if not name:
        return context.formulary.as_payload()
    return {"medications": context.formulary.filter(name)}
