"""ICD-10 lookups for Pharma Core.

Three kinds of questions are answered here:

- text search over the bundled ICD-10 code list;
- drug -> diagnosis code resolution (delegated to a configured source chain);
- the small local indication and reverse (code -> UAE drug) tables.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence

from pharma_core.lookup.local_mapping import LocalMappingTable
from pharma_core.lookup.models import ResolutionResult
from pharma_core.lookup.resolver import SourceChainResolver
from pharma_core.services.drug_records import as_suggestion
from pharma_core.services.drug_registry_service import DrugRegistryService

INDICATION_CAP = 8
REVERSE_LOOKUP_CAP = 20


class EmptyLookupTermError(ValueError):
    """Raised when a lookup is requested without a term."""


def search_codes(codes: Sequence[Mapping[str, str]], query: str, limit: int = 20) -> List[Dict[str, str]]:
    q = query.strip().lower()
    if not q:
        return []
    results = []
    for item in codes:
        if q in item["code"].lower() or q in item["description"].lower():
            results.append({"code": item["code"], "description": item["description"]})
            if len(results) >= limit:
                break
    return results


def parse_limit(raw: str | None, default: int = 20, maximum: int = 200) -> int:
    """Lenient ``limit`` parsing: blank, non-numeric or non-positive values use ``default``."""
    try:
        value = int((raw or "").strip())
    except ValueError:
        return default
    if value <= 0:
        return default
    return min(value, maximum)


async def resolve_term(resolver: SourceChainResolver, term: str | None) -> ResolutionResult:
    term = (term or "").strip()
    if not term:
        raise EmptyLookupTermError("term is required")
    return await resolver.resolve(term)


def drug_indications(table: LocalMappingTable, drug: str, cap: int = INDICATION_CAP) -> List[Dict[str, str]]:
    seen: set[str] = set()
    mappings = []
    for entry in table.match(drug):
        if entry.code in seen:
            continue
        seen.add(entry.code)
        mappings.append({"icd10_code": entry.code, "indication": entry.description})
    return mappings[:cap]


def drugs_for_code(
    registry: DrugRegistryService,
    keywords_by_category: Mapping[str, Sequence[str]],
    code: str,
    limit: int = REVERSE_LOOKUP_CAP,
) -> List[Dict[str, Any]]:
    category = code.strip().upper()[:3]
    keywords = keywords_by_category.get(category) or []
    return [as_suggestion(drug) for drug in registry.find_by_keywords(keywords, limit=limit)]
