"""SNOMED CT Snowstorm proxy endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status
from fastapi.responses import JSONResponse

from pharma_core.services.data_context import DataContext, get_context
from pharma_core.services.snomed_client import SnomedResponse

router = APIRouter(prefix="/snomed", tags=["snomed"])


def _respond(result: SnomedResponse) -> JSONResponse:
    return JSONResponse(status_code=200 if result.success else result.status_code, content=result.as_dict())


@router.get("/health")
async def health(context: DataContext = Depends(get_context)) -> JSONResponse:
    payload: Dict[str, Any] = await context.snomed.health()
    return JSONResponse(status_code=200 if payload["success"] else 502, content=payload)


@router.get("/concepts/search")
async def search_concepts(
    term: str | None = Query(default=None),
    ecl: str | None = Query(default=None),
    active_filter: bool | None = Query(default=None, alias="activeFilter"),
    limit: int = Query(default=50, ge=1, le=10000),
    offset: int = Query(default=0, ge=0),
    accept_language: str | None = Header(default=None),
    context: DataContext = Depends(get_context),
) -> JSONResponse:
    result = await context.snomed.search_concepts(
        term=term,
        ecl=ecl,
        active_filter=active_filter,
        limit=limit,
        offset=offset,
        accept_language=accept_language,
    )
    return _respond(result)


@router.get("/concepts/{concept_id}")
async def get_concept(
    concept_id: str,
    accept_language: str | None = Header(default=None),
    context: DataContext = Depends(get_context),
) -> JSONResponse:
    return _respond(await context.snomed.concept(concept_id, accept_language=accept_language))


@router.get("/concepts/{concept_id}/children")
async def get_children(
    concept_id: str,
    form: str = Query(default="inferred"),
    accept_language: str | None = Header(default=None),
    context: DataContext = Depends(get_context),
) -> JSONResponse:
    return _respond(await context.snomed.children(concept_id, form=form, accept_language=accept_language))


@router.get("/concepts/{concept_id}/parents")
async def get_parents(
    concept_id: str,
    form: str = Query(default="inferred"),
    accept_language: str | None = Header(default=None),
    context: DataContext = Depends(get_context),
) -> JSONResponse:
    return _respond(await context.snomed.parents(concept_id, form=form, accept_language=accept_language))


@router.get("/concepts/{concept_id}/ancestors")
async def get_ancestors(
    concept_id: str,
    form: str = Query(default="inferred"),
    accept_language: str | None = Header(default=None),
    context: DataContext = Depends(get_context),
) -> JSONResponse:
    return _respond(await context.snomed.ancestors(concept_id, form=form, accept_language=accept_language))


@router.get("/descriptions/search")
async def search_descriptions(
    term: str | None = Query(default=None),
    active: bool = Query(default=True),
    limit: int = Query(default=50, ge=1, le=10000),
    offset: int = Query(default=0, ge=0),
    semantic_tag: str | None = Query(default=None, alias="semanticTag"),
    concept_active: bool | None = Query(default=None, alias="conceptActive"),
    accept_language: str | None = Header(default=None),
    context: DataContext = Depends(get_context),
) -> JSONResponse:
    result = await context.snomed.search_descriptions(
        term=term,
        active=active,
        limit=limit,
        offset=offset,
        semantic_tag=semantic_tag,
        concept_active=concept_active,
        accept_language=accept_language,
    )
    return _respond(result)


@router.get("/ecl")
async def ecl_query(
    ecl: str = Query(default=""),
    limit: int = Query(default=50, ge=1, le=10000),
    offset: int = Query(default=0, ge=0),
    form: str = Query(default="inferred"),
    return_id_only: bool = Query(default=False, alias="returnIdOnly"),
    accept_language: str | None = Header(default=None),
    context: DataContext = Depends(get_context),
) -> JSONResponse:
    expression = ecl.strip()
    if not expression:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing 'ecl' query parameter")

    result = await context.snomed.ecl(
        expression,
        limit=limit,
        offset=offset,
        form=form,
        return_id_only=return_id_only,
        accept_language=accept_language,
    )
    return _respond(result)
