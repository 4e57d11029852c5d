"""UAE drug registry queries.

Searches go to the ``uae_drugs`` table when the database backend is enabled
and reachable; otherwise they run over the records loaded from the bundled
CSV.  Matching helpers used by coverage, listing and reverse lookups always
run in memory.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pharma_core.repositories.drug_repository import UAEDrugRepository
from pharma_core.services.drug_records import DrugRecord
from pharma_core.services.search_normalization import contains

logger = logging.getLogger(__name__)

BACKEND_DATABASE = "database"
BACKEND_CSV = "csv"


class DrugRegistryUnavailableError(RuntimeError):
    """Raised when the registry database fails mid-query."""


class DrugRegistryService:
    def __init__(
        self,
        drugs: Sequence[DrugRecord],
        *,
        session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
    ) -> None:
        self.drugs: tuple[DrugRecord, ...] = tuple(drugs)
        self._by_id: Dict[str, DrugRecord] = {drug.id: drug for drug in self.drugs}
        self._session_factory = session_factory

    @property
    def backend(self) -> str:
        return BACKEND_DATABASE if self._session_factory is not None else BACKEND_CSV

    def __len__(self) -> int:
        return len(self.drugs)

    # ------------------------------------------------------------------
    # Storage-backed queries
    # ------------------------------------------------------------------

    async def search(self, query: str = "", *, category: str = "", limit: int = 20) -> List[DrugRecord]:
        if self._session_factory is not None:
            try:
                async with self._session_factory() as session:
                    return await UAEDrugRepository(session).find(query, category=category, limit=limit)
            except SQLAlchemyError as exc:
                logger.exception("Drug registry search failed query=%r", query)
                raise DrugRegistryUnavailableError("Database query failed") from exc

        results = []
        for drug in self.drugs:
            if not drug.is_active:
                continue
            if query and not (contains(drug.package_name, query) or contains(drug.generic_name, query)):
                continue
            if category and not contains(drug.dosage_form, category):
                continue
            results.append(drug)
            if len(results) >= limit:
                break
        return results

    async def get(self, drug_id: str) -> Optional[DrugRecord]:
        if self._session_factory is not None:
            try:
                async with self._session_factory() as session:
                    return await UAEDrugRepository(session).get(drug_id)
            except SQLAlchemyError as exc:
                logger.exception("Drug registry lookup failed id=%s", drug_id)
                raise DrugRegistryUnavailableError("Database query failed") from exc

        return self._by_id.get(drug_id)

    async def categories(self) -> List[str]:
        if self._session_factory is not None:
            try:
                async with self._session_factory() as session:
                    return await UAEDrugRepository(session).categories()
            except SQLAlchemyError as exc:
                logger.exception("Drug registry categories query failed")
                raise DrugRegistryUnavailableError("Database query failed") from exc

        return sorted({drug.dosage_form for drug in self.drugs if drug.dosage_form and drug.is_active})

    # ------------------------------------------------------------------
    # In-memory matching
    # ------------------------------------------------------------------

    def find_first(self, term: str) -> Optional[DrugRecord]:
        for drug in self.drugs:
            if contains(drug.package_name, term) or contains(drug.generic_name, term):
                return drug
        return None

    def listing(self, term: str, *, limit: int = 10) -> List[DrugRecord]:
        results = []
        for drug in self.drugs:
            if (
                contains(drug.package_name, term)
                or contains(drug.generic_name, term)
                or contains(drug.manufacturer_name, term)
            ):
                results.append(drug)
                if len(results) >= limit:
                    break
        return results

    def find_by_keywords(self, keywords: Iterable[str], *, limit: int = 20) -> List[DrugRecord]:
        keywords = [k for k in keywords if k]
        if not keywords:
            return []
        results = []
        for drug in self.drugs:
            if any(contains(drug.package_name, k) or contains(drug.generic_name, k) for k in keywords):
                results.append(drug)
                if len(results) >= limit:
                    break
        return results
