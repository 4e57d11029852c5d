"""Process-wide read-only data and collaborators.

The :class:`DataContext` is built once by the application lifespan (or by a
test) and stored on ``app.state.context``; routes receive it through the
:func:`get_context` dependency.  Nothing in it is mutated after bootstrap.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence

import httpx
from fastapi import Request

from pharma_core.core.config import Settings, settings as default_settings
from pharma_core.data.drug_icd_mapping import (
    DRUG_ICD_FALLBACK,
    DRUG_ICD_MAPPING,
    DRUG_INDICATIONS,
    ICD10_DRUG_KEYWORDS,
)
from pharma_core.data.safety_tables import CATEGORY_DESCRIPTIONS, DRUG_INTERACTIONS, PREGNANCY_CATEGORIES
from pharma_core.db.async_session import get_session_factory, ping_database
from pharma_core.lookup.chains import build_resolvers
from pharma_core.lookup.local_mapping import LocalMappingTable
from pharma_core.lookup.resolver import SourceChainResolver
from pharma_core.services.data_loader import LoadReport, load_formulary, load_icd10_codes, load_uae_drugs
from pharma_core.services.drug_records import DrugRecord
from pharma_core.services.drug_registry_service import BACKEND_DATABASE, DrugRegistryService
from pharma_core.services.external_apis import ExternalAPIs
from pharma_core.services.formulary_service import FormularyService
from pharma_core.services.safety_service import SafetyService
from pharma_core.services.snomed_client import SnomedClient

logger = logging.getLogger(__name__)

INDICATIONS_TABLE = "indications"


def build_local_tables() -> Dict[str, LocalMappingTable]:
    """Local tables keyed by the chain (or lookup) that uses them."""
    return {
        "icd10_live": LocalMappingTable(DRUG_ICD_FALLBACK, merge_partial=False),
        "drug_icd": LocalMappingTable(DRUG_ICD_MAPPING),
        INDICATIONS_TABLE: LocalMappingTable(DRUG_INDICATIONS),
    }


@dataclass
class DataContext:
    registry: DrugRegistryService
    formulary: FormularyService
    safety: SafetyService
    resolvers: Mapping[str, SourceChainResolver]
    external: ExternalAPIs
    snomed: SnomedClient
    local_tables: Mapping[str, LocalMappingTable]
    icd10_codes: Sequence[Dict[str, str]] = field(default_factory=list)
    icd10_drug_keywords: Mapping[str, Sequence[str]] = field(default_factory=lambda: ICD10_DRUG_KEYWORDS)
    reports: Mapping[str, LoadReport] = field(default_factory=dict)
    database_available: bool = False

    @classmethod
    def assemble(
        cls,
        client: httpx.AsyncClient,
        *,
        drugs: Sequence[DrugRecord] = (),
        icd10_codes: Sequence[Dict[str, str]] = (),
        medications: Sequence[Dict[str, Any]] = (),
        reports: Optional[Mapping[str, LoadReport]] = None,
        registry: Optional[DrugRegistryService] = None,
        resolvers: Optional[Mapping[str, SourceChainResolver]] = None,
        app_settings: Settings = default_settings,
        database_available: bool = False,
    ) -> "DataContext":
        registry = registry if registry is not None else DrugRegistryService(drugs)
        local_tables = build_local_tables()
        return cls(
            registry=registry,
            formulary=FormularyService(medications, registry),
            safety=SafetyService(DRUG_INTERACTIONS, PREGNANCY_CATEGORIES, CATEGORY_DESCRIPTIONS),
            resolvers=resolvers if resolvers is not None else build_resolvers(client, local_tables=local_tables),
            external=ExternalAPIs.build(client),
            snomed=SnomedClient(
                client,
                base_url=app_settings.snomed_base_url,
                branch=app_settings.snomed_branch,
                timeout=app_settings.snomed_timeout,
            ),
            local_tables=local_tables,
            icd10_codes=list(icd10_codes),
            reports=dict(reports or {}),
            database_available=database_available,
        )

    def health(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {name: report.as_dict() for name, report in self.reports.items()}
        data["drugRegistry"] = {
            "backend": self.registry.backend,
            "count": len(self.registry),
            "databaseAvailable": self.database_available,
        }
        data["lookupChains"] = {name: resolver.source_names for name, resolver in self.resolvers.items()}
        return data


async def build_data_context(client: httpx.AsyncClient, app_settings: Settings = default_settings) -> DataContext:
    drugs, drugs_report = load_uae_drugs(app_settings.uae_drugs_csv)
    codes, codes_report = load_icd10_codes(app_settings.icd10_codes_json)
    medications, formulary_report = load_formulary(app_settings.daman_formulary_json)

    database_available = False
    session_factory = None
    if app_settings.drug_registry_backend == BACKEND_DATABASE:
        database_available = await ping_database()
        if database_available:
            session_factory = get_session_factory()
        else:
            logger.warning("Drug registry database unreachable; serving the bundled CSV")

    context = DataContext.assemble(
        client,
        drugs=drugs,
        icd10_codes=codes,
        medications=medications,
        reports={r.name: r for r in (drugs_report, codes_report, formulary_report)},
        registry=DrugRegistryService(drugs, session_factory=session_factory),
        app_settings=app_settings,
        database_available=database_available,
    )
    logger.info(
        "Data context ready uae_drugs=%s icd10_codes=%s formulary=%s registry_backend=%s",
        drugs_report.count,
        codes_report.count,
        formulary_report.count,
        context.registry.backend,
    )
    return context


def get_context(request: Request) -> DataContext:
    return request.app.state.context


def indications_table(context: DataContext) -> LocalMappingTable:
    return context.local_tables[INDICATIONS_TABLE]

