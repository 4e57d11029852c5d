"""SQLAlchemy model for the UAE drug registry.

Rows mirror the columns of the published UAE drug list CSV; coverage flags are
stored as booleans instead of the CSV's "Yes"/"No" strings.
"""

from __future__ import annotations

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from pharma_core.db.base import Base


class UAEDrug(Base):
    __tablename__ = "uae_drugs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    package_name: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    generic_name: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)
    strength: Mapped[str | None] = mapped_column(String(255), nullable=True)
    dosage_form: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    package_size: Mapped[str | None] = mapped_column(String(255), nullable=True)
    manufacturer_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    agent_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    price_public: Mapped[str | None] = mapped_column(String(64), nullable=True)
    price_pharmacy: Mapped[str | None] = mapped_column(String(64), nullable=True)
    unit_price_public: Mapped[str | None] = mapped_column(String(64), nullable=True)
    status: Mapped[str | None] = mapped_column(String(32), nullable=True, index=True)
    thiqa: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    basic: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    abm1: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    abm7: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
