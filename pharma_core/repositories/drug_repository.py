"""Async repository for the uae_drugs table."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from pharma_core.models.uae_drug import UAEDrug
from pharma_core.services.drug_records import ACTIVE_STATUS, DrugRecord


class UAEDrugRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find(
        self,
        query: str = "",
        *,
        category: str = "",
        limit: int = 50,
    ) -> List[DrugRecord]:
        stmt = select(UAEDrug).where(UAEDrug.status == ACTIVE_STATUS)

        query = (query or "").strip()
        if query:
            pattern = f"%{query}%"
            stmt = stmt.where(
                or_(
                    UAEDrug.package_name.ilike(pattern),
                    UAEDrug.generic_name.ilike(pattern),
                )
            )

        category = (category or "").strip()
        if category:
            stmt = stmt.where(UAEDrug.dosage_form.ilike(f"%{category}%"))

        stmt = stmt.order_by(UAEDrug.id).limit(limit)
        rows = (await self.db.execute(stmt)).scalars().all()
        return [DrugRecord.from_model(row) for row in rows]

    async def get(self, drug_id: str) -> Optional[DrugRecord]:
        try:
            key = int(drug_id)
        except (TypeError, ValueError):
            return None
        row = await self.db.get(UAEDrug, key)
        return DrugRecord.from_model(row) if row is not None else None

    async def categories(self) -> List[str]:
        stmt = (
            select(UAEDrug.dosage_form)
            .where(UAEDrug.status == ACTIVE_STATUS, UAEDrug.dosage_form.is_not(None))
            .distinct()
            .order_by(UAEDrug.dosage_form)
        )
        return [value for value in (await self.db.execute(stmt)).scalars().all() if value]
