from __future__ import annotations

import argparse
import logging
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pharma_core.core.config import settings
from pharma_core.db.session import SessionLocal
from pharma_core.services.data_loader import load_uae_drugs as read_uae_drugs
from pharma_core.services.registry_state import check_uae_drugs_loaded

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def load_uae_drugs(csv_path: str | None = None, batch_size: int = 2000) -> int:
    """Bulk load the UAE drug list into ``uae_drugs``; returns inserted rows.

    Idempotent: nothing is inserted when the table already has rows.
    """
    path = Path(csv_path) if csv_path else settings.uae_drugs_csv
    if not path.exists():
        raise FileNotFoundError(f"UAE drug CSV file not found: {path}")

    db: Session = SessionLocal()
    try:
        if check_uae_drugs_loaded(db):
            logger.info("uae_drugs already loaded")
            return 0

        drugs, report = read_uae_drugs(path)
        if not report.loaded:
            logger.error("No drugs read from %s", path.as_posix())
            return 0

        logger.info("Starting uae_drugs load from %s rows=%s", path.as_posix(), len(drugs))

        inserted_total = 0
        for start in range(0, len(drugs), batch_size):
            batch = [drug.to_model() for drug in drugs[start:start + batch_size]]
            try:
                db.add_all(batch)
                db.commit()
            except SQLAlchemyError:
                db.rollback()
                logger.exception("Failed inserting uae_drugs batch start=%s", start)
                return inserted_total
            inserted_total += len(batch)
            logger.info("Inserted %s uae_drugs rows", inserted_total)

        logger.info("uae_drugs loaded successfully. Inserted rows=%s", inserted_total)
        return inserted_total
    finally:
        db.close()


def main() -> None:
    _configure_logging()
    parser = argparse.ArgumentParser(description="Load the UAE drug list into PostgreSQL")
    parser.add_argument(
        "--csv",
        default=None,
        help="Path to the UAE drug list CSV (defaults to pharma_core/data/uae_drug_list.csv)",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=2000,
        help="Batch size for bulk inserts",
    )
    args = parser.parse_args()

    load_uae_drugs(csv_path=args.csv, batch_size=args.batch_size)


if __name__ == "__main__":
    main()
