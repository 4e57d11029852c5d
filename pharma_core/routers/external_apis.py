"""Proxy endpoints for OpenFDA, RxNorm and ChEMBL.

Provider failures are reported inside the payload (empty items plus a
``note``); these routes always answer 200.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, Query

from pharma_core.services.data_context import DataContext, get_context
from pharma_core.services.external_apis import DEFAULT_COMBINED_APIS

router = APIRouter(prefix="/external", tags=["external-apis"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/openfda/drug-labels/{drug_name}")
async def openfda_drug_labels(
    drug_name: str,
    limit: int = Query(default=10, ge=1, le=100),
    context: DataContext = Depends(get_context),
) -> Dict[str, Any]:
    outcome = await context.external.openfda.drug_labels(drug_name, limit=limit)
    return {"drugName": drug_name, **outcome.as_dict("labels"), "timestamp": _now()}


@router.get("/openfda/adverse-events/{drug_name}")
async def openfda_adverse_events(
    drug_name: str,
    limit: int = Query(default=10, ge=1, le=100),
    context: DataContext = Depends(get_context),
) -> Dict[str, Any]:
    outcome = await context.external.openfda.adverse_events(drug_name, limit=limit)
    return {"drugName": drug_name, **outcome.as_dict("adverseEvents"), "timestamp": _now()}


@router.get("/rxnorm/search/{drug_name}")
async def rxnorm_search(drug_name: str, context: DataContext = Depends(get_context)) -> Dict[str, Any]:
    outcome = await context.external.rxnorm.search(drug_name)
    return {"query": drug_name, **outcome.as_dict("drugs"), "timestamp": _now()}


@router.get("/rxnorm/interactions/{rxcui}")
async def rxnorm_interactions(rxcui: str, context: DataContext = Depends(get_context)) -> Dict[str, Any]:
    outcome = await context.external.rxnorm.interactions(rxcui)
    return {"rxcui": rxcui, **outcome.as_dict("interactions"), "timestamp": _now()}


@router.get("/chembl/search/{drug_name}")
async def chembl_search(
    drug_name: str,
    limit: int = Query(default=10, ge=1, le=100),
    context: DataContext = Depends(get_context),
) -> Dict[str, Any]:
    outcome = await context.external.chembl.search(drug_name, limit=limit)
    return {"query": drug_name, **outcome.as_dict("molecules"), "timestamp": _now()}


@router.get("/chembl/targets/{chembl_id}")
async def chembl_targets(chembl_id: str, context: DataContext = Depends(get_context)) -> Dict[str, Any]:
    outcome = await context.external.chembl.targets(chembl_id)
    return {"chemblId": chembl_id, **outcome.as_dict("targets"), "timestamp": _now()}


@router.get("/combined-search/{drug_name}")
async def combined_search(
    drug_name: str,
    apis: str = Query(default=",".join(DEFAULT_COMBINED_APIS)),
    context: DataContext = Depends(get_context),
) -> Dict[str, Any]:
    sources = await context.external.combined_search(drug_name, apis.split(","))
    return {
        "drugName": drug_name,
        "sources": sources,
        "timestamp": _now(),
        "note": "Combined results from multiple pharmaceutical APIs",
    }


@router.get("/health")
def health(context: DataContext = Depends(get_context)) -> Dict[str, Any]:
    return {"status": "healthy", "apis": context.external.base_urls(), "timestamp": _now()}
