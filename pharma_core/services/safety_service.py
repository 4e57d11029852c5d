"""Drug interaction and pregnancy category lookups over the static safety tables."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

NO_INTERACTION_MESSAGE = "No known interaction between these medications"
NO_PREGNANCY_DATA_MESSAGE = "No pregnancy category information found for this medication"


def _related(key: str, term: str) -> bool:
    return key in term or term in key


class SafetyService:
    def __init__(
        self,
        interactions: Mapping[str, Mapping[str, Mapping[str, str]]],
        pregnancy: Mapping[str, Mapping[str, str]],
        category_descriptions: Mapping[str, str],
    ) -> None:
        self.interactions = interactions
        self.pregnancy = pregnancy
        self.category_descriptions = category_descriptions

    def interactions_for(self, drug: str) -> Dict[str, Dict[str, Any]]:
        """Every interaction the drug takes part in, on either side of the table.

        Reverse hits are keyed by the matched interacting drug, e.g. looking up
        ``warfarin`` also returns ``{"warfarin": {"aspirin": ...}}``.
        """
        term = drug.strip().lower()
        found: Dict[str, Dict[str, Any]] = {}
        if not term:
            return found

        for name, pairs in self.interactions.items():
            if _related(name, term):
                found[name] = dict(pairs)

        for name, pairs in self.interactions.items():
            for other, data in pairs.items():
                if _related(other, term):
                    found.setdefault(other, {})[name] = dict(data)

        return found

    def interaction_between(self, drug1: str, drug2: str) -> Optional[Dict[str, str]]:
        first = drug1.strip().lower()
        second = drug2.strip().lower()

        direct = self.interactions.get(first, {}).get(second)
        if direct is not None:
            return dict(direct)

        reverse = self.interactions.get(second, {}).get(first)
        if reverse is not None:
            return dict(reverse)

        for name, pairs in self.interactions.items():
            if not _related(name, first):
                continue
            for other, data in pairs.items():
                if _related(other, second):
                    return dict(data)
        return None

    def pregnancy_category(self, drug: str) -> Optional[Dict[str, str]]:
        term = drug.strip().lower()
        if not term:
            return None

        key: Optional[str] = term if term in self.pregnancy else None
        if key is None:
            key = next((name for name in self.pregnancy if _related(name, term)), None)
        if key is None:
            return None

        data = self.pregnancy[key]
        return {
            "drug": key,
            **data,
            "categoryDescription": self.category_descriptions.get(data["category"][:1], ""),
        }
