"""Offline drug -> ICD-10 enrichment for the UAE drug list.

Resolves the first ``--limit`` drugs through the ``batch_enrichment`` source
chain, pausing between drugs to stay under upstream rate limits, and writes
``{drug name: [{code, description}, ...]}`` for the drugs that resolved.

Usage:
    python -m pharma_core.scripts.enrich_drug_icd10 --limit 25 --output icd10-data-fast.json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

import httpx

from pharma_core.core.config import settings
from pharma_core.core.lookup_config import BatchThrottle, batch_throttle, lookup_chains
from pharma_core.lookup.chains import build_resolver
from pharma_core.lookup.resolver import SourceChainResolver
from pharma_core.lookup.sources import build_source_descriptors
from pharma_core.services.data_loader import read_uae_drug_rows
from pharma_core.services.drug_records import COL_GENERIC_NAME, COL_PACKAGE_NAME
from pharma_core.services.search_normalization import extract_generic_name

logger = logging.getLogger(__name__)

CHAIN_NAME = "batch_enrichment"


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def build_work_items(rows: List[Dict[str, str]], limit: int) -> Dict[str, List[str]]:
    """Map each drug name to the search terms tried for it, in order."""
    items: Dict[str, List[str]] = {}
    for row in rows[:limit]:
        package_name = (row.get(COL_PACKAGE_NAME) or "").strip()
        generic_name = (row.get(COL_GENERIC_NAME) or "").strip()
        drug_name = package_name or generic_name
        if not drug_name or drug_name in items:
            continue

        terms: List[str] = []
        for term in (extract_generic_name(drug_name), drug_name):
            if term and term not in terms:
                terms.append(term)
        items[drug_name] = terms
    return items


async def enrich(
    resolver: SourceChainResolver,
    items: Dict[str, List[str]],
    *,
    throttle: BatchThrottle = batch_throttle,
) -> Dict[str, List[Dict[str, str]]]:
    resolved = await resolver.resolve_batch(items, throttle=throttle)
    return {
        name: [entry.as_dict() for entry in result.entries]
        for name, result in resolved.items()
        if result.found
    }


async def run(csv_path: Path, limit: int, output: Path) -> Dict[str, List[Dict[str, str]]]:
    rows = read_uae_drug_rows(csv_path, require_package_name=False)
    logger.info("Loaded %s drugs from %s", len(rows), csv_path.as_posix())

    items = build_work_items(rows, limit)
    logger.info("Processing %s prioritized drugs", len(items))

    async with httpx.AsyncClient(
        headers={"Accept": "application/json", "User-Agent": settings.http_user_agent},
        follow_redirects=True,
    ) as client:
        resolver = build_resolver(
            CHAIN_NAME,
            lookup_chains.batch_enrichment,
            client=client,
            descriptors=build_source_descriptors(),
        )
        results = await enrich(resolver, items)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(results, indent=2, ensure_ascii=False), encoding="utf-8")

    processed = len(items)
    found = len(results)
    rate = (found / processed * 100.0) if processed else 0.0
    logger.info(
        "Enrichment complete processed=%s found=%s success_rate=%.1f%% output=%s",
        processed,
        found,
        rate,
        output.as_posix(),
    )
    return results


def main(argv: Optional[List[str]] = None) -> None:
    _configure_logging()
    parser = argparse.ArgumentParser(description="Resolve ICD-10 codes for UAE drugs via public coding APIs")
    parser.add_argument("--csv", default=None, help="UAE drug list CSV (defaults to the bundled dataset)")
    parser.add_argument("--limit", type=int, default=25, help="Number of drugs to process")
    parser.add_argument("--output", default="icd10-data-fast.json", help="Output JSON path")
    args = parser.parse_args(argv)

    csv_path = Path(args.csv) if args.csv else settings.uae_drugs_csv
    if not csv_path.exists():
        raise FileNotFoundError(f"UAE drug CSV file not found: {csv_path}")

    asyncio.run(run(csv_path, max(args.limit, 0), Path(args.output)))


if __name__ == "__main__":
    main()
