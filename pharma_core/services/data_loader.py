"""Load the bundled datasets (UAE drug list, ICD-10 codes, Daman formulary).

Missing or unreadable files never stop the service: the loader logs a warning
and returns an empty dataset so the remaining endpoints keep working.
"""

from __future__ import annotations

import csv
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from pharma_core.services.drug_records import COL_GENERIC_NAME, COL_PACKAGE_NAME, DrugRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadReport:
    name: str
    count: int
    loaded: bool

    @property
    def status(self) -> str:
        return "ok" if self.loaded and self.count else ("empty" if self.loaded else "failed")

    def as_dict(self) -> Dict[str, Any]:
        return {"count": self.count, "loaded": self.loaded, "status": self.status}


def read_uae_drug_rows(path: Path, *, require_package_name: bool = True) -> List[Dict[str, str]]:
    """Return raw CSV rows with trimmed headers.

    Rows without a package name are dropped unless ``require_package_name`` is
    false, in which case only rows with neither a package nor a generic name are.
    """
    # utf-8-sig strips the byte order mark the published export carries.
    with open(path, encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames:
            reader.fieldnames = [name.strip() for name in reader.fieldnames]
        rows = []
        for row in reader:
            package_name = (row.get(COL_PACKAGE_NAME) or "").strip()
            generic_name = (row.get(COL_GENERIC_NAME) or "").strip()
            if not package_name and (require_package_name or not generic_name):
                continue
            rows.append(row)
    return rows


def load_uae_drugs(path: Path) -> tuple[List[DrugRecord], LoadReport]:
    if not path.exists():
        logger.warning("UAE drug list not found path=%s; using empty dataset", path.as_posix())
        return [], LoadReport("uae_drugs", 0, False)

    try:
        rows = read_uae_drug_rows(path)
    except (OSError, UnicodeDecodeError, csv.Error):
        logger.exception("Failed to read UAE drug list path=%s", path.as_posix())
        return [], LoadReport("uae_drugs", 0, False)

    drugs = [DrugRecord.from_csv_row(row, str(index)) for index, row in enumerate(rows, start=1)]
    if not drugs:
        logger.error("No valid drugs found in %s", path.as_posix())
        return [], LoadReport("uae_drugs", 0, False)

    logger.info("Loaded UAE drugs count=%s path=%s", len(drugs), path.as_posix())
    return drugs, LoadReport("uae_drugs", len(drugs), True)


def _read_json(path: Path, label: str) -> Any:
    if not path.exists():
        logger.warning("%s file not found path=%s; using empty dataset", label, path.as_posix())
        return None
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        logger.exception("Failed to read %s path=%s", label, path.as_posix())
        return None
    if not raw.strip():
        logger.error("%s file is empty path=%s", label, path.as_posix())
        return None
    try:
        return json.loads(raw)
    except ValueError:
        logger.exception("Invalid JSON in %s path=%s", label, path.as_posix())
        return None


def load_icd10_codes(path: Path) -> tuple[List[Dict[str, str]], LoadReport]:
    """Load ``{code, description}`` records.

    The file is either a flat list or an object of chapter -> list, which is
    flattened in file order.
    """
    payload = _read_json(path, "ICD-10 codes")
    if payload is None:
        return [], LoadReport("icd10_codes", 0, False)

    if isinstance(payload, dict):
        groups = payload.values()
    else:
        groups = [payload]

    codes: List[Dict[str, str]] = []
    for group in groups:
        if not isinstance(group, list):
            continue
        for item in group:
            if not isinstance(item, dict):
                continue
            code = str(item.get("code") or "").strip()
            description = str(item.get("description") or "").strip()
            if code and description:
                codes.append({"code": code, "description": description})

    logger.info("Loaded ICD-10 codes count=%s", len(codes))
    return codes, LoadReport("icd10_codes", len(codes), True)


def load_formulary(path: Path) -> tuple[List[Dict[str, Any]], LoadReport]:
    """Load Daman formulary medications from any of the shapes the export has used."""
    payload = _read_json(path, "Daman formulary")
    if payload is None:
        return [], LoadReport("daman_formulary", 0, False)

    if isinstance(payload, list):
        medications = payload
    elif isinstance(payload, dict) and isinstance(payload.get("medications"), list):
        medications = payload["medications"]
    elif isinstance(payload, dict) and isinstance(payload.get("data"), list):
        medications = payload["data"]
    elif isinstance(payload, dict):
        medications = list(payload.values())
    else:
        logger.error("Invalid Daman formulary structure type=%s", type(payload).__name__)
        return [], LoadReport("daman_formulary", 0, False)

    medications = [m for m in medications if isinstance(m, dict)]
    logger.info("Loaded Daman formulary medications count=%s", len(medications))
    return medications, LoadReport("daman_formulary", len(medications), True)
