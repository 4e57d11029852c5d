from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pharma_core.models.uae_drug import UAEDrug

logger = logging.getLogger(__name__)


def check_uae_drugs_loaded(session: Session) -> bool:
    """Return True when uae_drugs has at least one row."""
    try:
        count = session.execute(select(func.count()).select_from(UAEDrug)).scalar_one()
        return bool(count and count > 0)
    except SQLAlchemyError:
        logger.exception("Failed to check uae_drugs load state")
        return False
