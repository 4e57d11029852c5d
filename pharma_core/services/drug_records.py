"""UAE drug registry records and their API representations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from pharma_core.models.uae_drug import UAEDrug

# Column headers of the published UAE drug list CSV.
COL_PACKAGE_NAME = "Package Name"
COL_GENERIC_NAME = "Generic Name"
COL_STRENGTH = "Strength"
COL_DOSAGE_FORM = "Dosage Form"
COL_PACKAGE_SIZE = "Package Size"
COL_MANUFACTURER = "Manufacturer Name"
COL_AGENT = "Agent Name"
COL_PRICE_PUBLIC = "Package Price to Public"
COL_PRICE_PHARMACY = "Package Price to Pharmacy"
COL_UNIT_PRICE_PUBLIC = "Unit Price to Public"
COL_STATUS = "Status"
COL_THIQA = "Included in Thiqa/ ABM - other than 1&7- Drug Formulary"
COL_BASIC = "Included In Basic Drug Formulary"
COL_ABM1 = "Included In ABM 1 Drug Formulary"
COL_ABM7 = "Included In ABM 7 Drug Formulary"

ACTIVE_STATUS = "Active"


def _cell(row: Mapping[str, Any], column: str) -> str:
    value = row.get(column)
    return str(value).strip() if value is not None else ""


def _flag(row: Mapping[str, Any], column: str) -> bool:
    return _cell(row, column) == "Yes"


@dataclass(frozen=True)
class DrugRecord:
    id: str
    package_name: str
    generic_name: str = ""
    strength: str = ""
    dosage_form: str = ""
    package_size: str = ""
    manufacturer_name: str = ""
    agent_name: str = ""
    price_public: str = ""
    price_pharmacy: str = ""
    unit_price_public: str = ""
    status: str = ""
    thiqa: bool = False
    basic: bool = False
    abm1: bool = False
    abm7: bool = False

    @property
    def is_active(self) -> bool:
        return self.status == ACTIVE_STATUS

    @classmethod
    def from_csv_row(cls, row: Mapping[str, Any], drug_id: str) -> "DrugRecord":
        return cls(
            id=drug_id,
            package_name=_cell(row, COL_PACKAGE_NAME),
            generic_name=_cell(row, COL_GENERIC_NAME),
            strength=_cell(row, COL_STRENGTH),
            dosage_form=_cell(row, COL_DOSAGE_FORM),
            package_size=_cell(row, COL_PACKAGE_SIZE),
            manufacturer_name=_cell(row, COL_MANUFACTURER),
            agent_name=_cell(row, COL_AGENT),
            price_public=_cell(row, COL_PRICE_PUBLIC),
            price_pharmacy=_cell(row, COL_PRICE_PHARMACY),
            unit_price_public=_cell(row, COL_UNIT_PRICE_PUBLIC),
            status=_cell(row, COL_STATUS),
            thiqa=_flag(row, COL_THIQA),
            basic=_flag(row, COL_BASIC),
            abm1=_flag(row, COL_ABM1),
            abm7=_flag(row, COL_ABM7),
        )

    @classmethod
    def from_model(cls, row: UAEDrug) -> "DrugRecord":
        return cls(
            id=str(row.id),
            package_name=row.package_name or "",
            generic_name=row.generic_name or "",
            strength=row.strength or "",
            dosage_form=row.dosage_form or "",
            package_size=row.package_size or "",
            manufacturer_name=row.manufacturer_name or "",
            agent_name=row.agent_name or "",
            price_public=row.price_public or "",
            price_pharmacy=row.price_pharmacy or "",
            unit_price_public=row.unit_price_public or "",
            status=row.status or "",
            thiqa=bool(row.thiqa),
            basic=bool(row.basic),
            abm1=bool(row.abm1),
            abm7=bool(row.abm7),
        )

    def to_model(self) -> UAEDrug:
        return UAEDrug(
            id=int(self.id),
            package_name=self.package_name,
            generic_name=self.generic_name or None,
            strength=self.strength or None,
            dosage_form=self.dosage_form or None,
            package_size=self.package_size or None,
            manufacturer_name=self.manufacturer_name or None,
            agent_name=self.agent_name or None,
            price_public=self.price_public or None,
            price_pharmacy=self.price_pharmacy or None,
            unit_price_public=self.unit_price_public or None,
            status=self.status or None,
            thiqa=self.thiqa,
            basic=self.basic,
            abm1=self.abm1,
            abm7=self.abm7,
        )


# ---------------------------------------------------------------------------
# Representations
# ---------------------------------------------------------------------------

def as_search_result(drug: DrugRecord) -> dict[str, Any]:
    return {
        "id": drug.id,
        "drug_name": drug.package_name or "Unknown",
        "generic_name": drug.generic_name or "Unknown",
        "category": drug.dosage_form or "Medication",
        "strength": drug.strength,
        "dosage_form": drug.dosage_form,
        "indications": f"{drug.package_name} is available in the UAE market.",
        "contraindications": "Please consult healthcare provider for contraindications.",
        "side_effects": "Please consult healthcare provider for side effects.",
        "manufacturer": drug.manufacturer_name,
        "agent": drug.agent_name,
        "price_public": drug.price_public,
        "thiqa_coverage": drug.thiqa,
        "basic_coverage": drug.basic,
    }


def as_detail(drug: DrugRecord) -> dict[str, Any]:
    manufacturer = drug.manufacturer_name or "Unknown manufacturer"
    return {
        "id": drug.id,
        "drug_name": drug.package_name or "Unknown",
        "generic_name": drug.generic_name or "Unknown",
        "category": drug.dosage_form or "Medication",
        "strength": drug.strength,
        "dosage_form": drug.dosage_form,
        "indications": (
            f"{drug.package_name} ({drug.generic_name}) is available in the UAE pharmaceutical market. "
            f"This medication is manufactured by {manufacturer}."
        ),
        "contraindications": "Please consult your healthcare provider for specific contraindications and precautions.",
        "side_effects": "Please consult your healthcare provider for potential side effects and adverse reactions.",
        "manufacturer": drug.manufacturer_name,
        "agent": drug.agent_name,
        "price_public": drug.price_public,
        "price_pharmacy": drug.price_pharmacy,
        "unit_price_public": drug.unit_price_public,
        "thiqa_coverage": drug.thiqa,
        "basic_coverage": drug.basic,
        "abm1_coverage": drug.abm1,
        "abm7_coverage": drug.abm7,
        "status": drug.status,
        "icd10_codes": [],
    }


def as_uae_listing(drug: DrugRecord) -> dict[str, Any]:
    return {
        "name": drug.package_name or "Unknown",
        "genericName": drug.generic_name or "Unknown",
        "strength": drug.strength or "N/A",
        "dosageForm": drug.dosage_form or "N/A",
        "drugCode": drug.agent_name or "N/A",
        "manufacturer": drug.manufacturer_name or "N/A",
        "packageSize": drug.package_size or "N/A",
        "dispenseMode": "Available" if drug.is_active else "Discontinued",
        "packagePricePublic": drug.price_public or "N/A",
        "unitPricePublic": drug.unit_price_public or "N/A",
        "thiqa": drug.thiqa,
        "basic": drug.basic,
        "priorAuthorization": False,
        "contraindications": "Consult healthcare provider",
    }


def as_coverage(drug: DrugRecord) -> dict[str, Any]:
    return {
        "name": drug.package_name,
        "activeIngredient": drug.generic_name,
        "dosageForm": drug.dosage_form,
        "strength": drug.strength,
        "thiqa": drug.thiqa,
        "basic": drug.basic,
        "enhanced": drug.abm1 or drug.abm7,
        "priorAuthorization": False,
        "price_public": drug.price_public,
        "manufacturer": drug.manufacturer_name,
    }


def as_suggestion(drug: DrugRecord) -> dict[str, Any]:
    return {
        "id": drug.id,
        "name": drug.package_name,
        "generic": drug.generic_name,
        "strength": drug.strength,
        "form": drug.dosage_form,
    }
