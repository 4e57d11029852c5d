"""Daman insurance coverage lookups."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from pharma_core.services.drug_records import as_coverage
from pharma_core.services.drug_registry_service import DrugRegistryService
from pharma_core.services.search_normalization import contains


def _text(item: Dict[str, Any], key: str) -> str:
    value = item.get(key)
    return value if isinstance(value, str) else ""


class FormularyService:
    def __init__(self, medications: Sequence[Dict[str, Any]], registry: DrugRegistryService) -> None:
        self.medications: tuple[Dict[str, Any], ...] = tuple(medications)
        self.registry = registry

    def coverage(self, drug: str) -> Optional[Dict[str, Any]]:
        """Coverage flags for ``drug``.

        The UAE registry is consulted first (substring on package or generic
        name); the Daman formulary only answers exact name or active
        ingredient matches.
        """
        record = self.registry.find_first(drug)
        if record is not None:
            return as_coverage(record)

        wanted = drug.strip().lower()
        for medication in self.medications:
            if _text(medication, "name").lower() == wanted or _text(medication, "activeIngredient").lower() == wanted:
                return medication
        return None

    def filter(self, drug: str) -> List[Dict[str, Any]]:
        return [
            medication
            for medication in self.medications
            if contains(_text(medication, "name"), drug) or contains(_text(medication, "activeIngredient"), drug)
        ]

    def as_payload(self) -> Dict[str, Any]:
        return {"medications": list(self.medications)}
