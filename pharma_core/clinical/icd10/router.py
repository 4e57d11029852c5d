"""FastAPI router for ICD-10.

Mounted under ``/api/icd10``.  Drug -> code lookups run through configured
source chains; every chain answers ``{results, source}`` and never fails
because an upstream provider did.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from pharma_core.clinical.icd10.service import (
    EmptyLookupTermError,
    drug_indications,
    drugs_for_code,
    parse_limit,
    resolve_term,
    search_codes,
)
from pharma_core.lookup.resolver import SourceChainResolver
from pharma_core.schemas.lookup import (
    DrugSuggestionsResponse,
    ICD10SearchResponse,
    IndicationsResponse,
    LookupResponse,
)
from pharma_core.services.data_context import DataContext, get_context, indications_table

router = APIRouter()

ICD10_LIVE_CHAIN = "icd10_live"
DRUG_ICD_CHAIN = "drug_icd"


async def _lookup(resolver: SourceChainResolver, term: str | None, missing_detail: str) -> LookupResponse:
    try:
        result = await resolve_term(resolver, term)
    except EmptyLookupTermError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=missing_detail) from exc
    return LookupResponse.from_result(result)


@router.get("/search", response_model=ICD10SearchResponse)
def search(
    q: str = Query(default=""),
    limit: str | None = Query(default=None),
    context: DataContext = Depends(get_context),
) -> ICD10SearchResponse:
    query = q.strip()
    if not query:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Query parameter required")

    results = search_codes(context.icd10_codes, query, limit=parse_limit(limit))
    return ICD10SearchResponse(results=results, total=len(results), query=query)


@router.get("/live", response_model=LookupResponse)
async def live(
    terms: str | None = Query(default=None),
    context: DataContext = Depends(get_context),
) -> LookupResponse:
    return await _lookup(context.resolvers[ICD10_LIVE_CHAIN], terms, "Missing 'terms' query parameter")


@router.get("/drug-codes", response_model=LookupResponse)
async def drug_codes(
    drug: str | None = Query(default=None),
    context: DataContext = Depends(get_context),
) -> LookupResponse:
    return await _lookup(context.resolvers[DRUG_ICD_CHAIN], drug, "Missing 'drug' query parameter")


@router.get("/live/drugs/{drug_name}/indications", response_model=IndicationsResponse)
def indications(drug_name: str, context: DataContext = Depends(get_context)) -> IndicationsResponse:
    return IndicationsResponse(icd10_mappings=drug_indications(indications_table(context), drug_name))


@router.get("/live/icd10/{code}/drugs", response_model=DrugSuggestionsResponse)
def drugs_for_icd10(code: str, context: DataContext = Depends(get_context)) -> DrugSuggestionsResponse:
    drugs = drugs_for_code(context.registry, context.icd10_drug_keywords, code)
    return DrugSuggestionsResponse(drugs=drugs)
