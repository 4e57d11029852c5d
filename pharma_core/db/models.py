from pharma_core.db.base import Base

# Import all models here
from pharma_core.models.uae_drug import UAEDrug

__all__ = ["Base", "UAEDrug"]
