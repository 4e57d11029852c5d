import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from pharma_core.core.lookup_config import BatchThrottle
from pharma_core.lookup.models import CodeEntry
from pharma_core.lookup.resolver import LookupStrategy, SourceChainResolver
from pharma_core.scripts.enrich_drug_icd10 import build_work_items, enrich

NO_DELAYS = BatchThrottle(delay_seconds=0.0, pause_every=0, pause_seconds=0.0)


class _GenericOnly(LookupStrategy):
    name = "NIH Clinical Tables"
    is_remote = True

    def __init__(self) -> None:
        self.terms: list[str] = []

    async def lookup(self, term: str) -> list[CodeEntry]:
        self.terms.append(term)
        if term == "metformin":
            return [CodeEntry("E11.9", "Type 2 diabetes mellitus without complications")]
        return []


class BuildWorkItemsTests(unittest.TestCase):
    def test_generic_guess_is_tried_before_package_name(self) -> None:
        rows = [
            {"Package Name": "Pfizer-Amlodipine 5 mg", "Generic Name": "Amlodipine"},
            {"Package Name": "Panadol", "Generic Name": "Paracetamol"},
            {"Package Name": "Pfizer-Amlodipine 5 mg", "Generic Name": "Amlodipine"},
            {"Package Name": "", "Generic Name": "Omeprazole"},
        ]

        items = build_work_items(rows, limit=10)

        self.assertEqual(
            items,
            {
                "Pfizer-Amlodipine 5 mg": ["amlodipine", "Pfizer-Amlodipine 5 mg"],
                "Panadol": ["panadol", "Panadol"],
                "Omeprazole": ["omeprazole", "Omeprazole"],
            },
        )

    def test_limit_applies_to_rows(self) -> None:
        rows = [{"Package Name": f"Drug {i}"} for i in range(5)]
        self.assertEqual(len(build_work_items(rows, limit=2)), 2)


class EnrichTests(unittest.IsolatedAsyncioTestCase):
    async def test_only_resolved_drugs_are_written(self) -> None:
        strategy = _GenericOnly()
        resolver = SourceChainResolver("batch_enrichment", [strategy], cap=3)

        results = await enrich(
            resolver,
            {"Metformin 500mg": ["metformin", "Metformin 500mg"], "Mystery": ["mystery"]},
            throttle=NO_DELAYS,
        )

        self.assertEqual(
            results,
            {"Metformin 500mg": [{"code": "E11.9", "description": "Type 2 diabetes mellitus without complications"}]},
        )
        # The package name is never tried once the generic guess resolved.
        self.assertEqual(strategy.terms, ["metformin", "mystery"])


if __name__ == "__main__":
    unittest.main()
