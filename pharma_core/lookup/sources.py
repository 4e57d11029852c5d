"""Static source descriptors for every remote code provider."""

from __future__ import annotations

from urllib.parse import quote

from pharma_core.core.lookup_config import UpstreamTimeouts, upstream_timeouts
from pharma_core.lookup.models import SourceDescriptor
from pharma_core.lookup.parsers import (
    ICD10APIParser,
    NIHClinicalTablesParser,
    OpenFDALabelParser,
    WHOICDParser,
)

NIH_ICD10_URL = "https://clinicaltables.nlm.nih.gov/api/icd10cm/v3/search"
ICD10API_URL = "https://icd10api.com/"
WHO_ICD_URL = "https://id.who.int/icd/release/11/2019-04/mms/search"
OPENFDA_LABEL_URL = "https://api.fda.gov/drug/label.json"


def _nih_url(term: str) -> str:
    return f"{NIH_ICD10_URL}?sf=code,name&terms={quote(term, safe='')}"


def _icd10api_url(term: str) -> str:
    return f"{ICD10API_URL}?s={quote(term, safe='')}&desc=short&r=json"


def _who_url(term: str) -> str:
    return f"{WHO_ICD_URL}?q={quote(term, safe='')}"


def _openfda_label_url(term: str) -> str:
    return f'{OPENFDA_LABEL_URL}?search=openfda.generic_name:"{quote(term, safe="")}"&limit=3'


def build_source_descriptors(timeouts: UpstreamTimeouts = upstream_timeouts) -> dict[str, SourceDescriptor]:
    """Return descriptors keyed by the strategy name used in chain configs."""
    return {
        "nih": SourceDescriptor(
            name=NIHClinicalTablesParser.provider,
            query_builder=_nih_url,
            parser=NIHClinicalTablesParser(),
            timeout=timeouts.nih,
        ),
        "icd10api": SourceDescriptor(
            name=ICD10APIParser.provider,
            query_builder=_icd10api_url,
            parser=ICD10APIParser(),
            timeout=timeouts.icd10api,
        ),
        "who": SourceDescriptor(
            name=WHOICDParser.provider,
            query_builder=_who_url,
            parser=WHOICDParser(),
            timeout=timeouts.who,
        ),
        "openfda_label": SourceDescriptor(
            name=OpenFDALabelParser.provider,
            query_builder=_openfda_label_url,
            parser=OpenFDALabelParser(),
            timeout=timeouts.openfda_label,
        ),
    }
