"""Provider parsers: turn one provider's raw JSON into ``CodeEntry`` lists.

Each provider returns a different payload shape, so each gets an explicit
parser.  Parsers never raise: an unexpected shape yields a ``ParseFailure``
and an empty-but-valid payload yields ``[]``.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from pharma_core.lookup.models import CodeEntry, ParseFailure, ParseOutcome, clean_entries

logger = logging.getLogger(__name__)

_HIGHLIGHT_RE = re.compile(r"</?em[^>]*>", re.IGNORECASE)

# Fixed vocabulary matched against free-text label indications.  This is a
# keyword heuristic, not a terminology mapping.
CONDITION_KEYWORDS: tuple[str, ...] = (
    "diabetes", "hypertension", "depression", "asthma", "infection", "pain",
    "fever", "inflammation", "allergy", "cancer", "heart", "kidney", "liver",
    "lung", "brain", "blood", "bone", "skin", "eye", "ear", "nose", "throat",
    "arthritis", "migraine", "epilepsy", "anxiety", "insomnia", "nausea",
    "vomiting", "diarrhea", "constipation", "ulcer", "reflux", "cholesterol",
    "thyroid", "anemia", "clot", "stroke", "seizure",
)
_CONDITION_RE = re.compile(r"(" + "|".join(CONDITION_KEYWORDS) + r")", re.IGNORECASE)

MED_CONDITION_CODE = "MED_CONDITION"


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (str, int, float)):
        return str(value).strip()
    return ""


class ProviderParser:
    """Base class; subclasses implement :meth:`parse` for one provider."""

    provider: str = ""

    def __call__(self, payload: Any) -> ParseOutcome:
        try:
            return self.parse(payload)
        except (TypeError, ValueError, KeyError, IndexError, AttributeError) as exc:
            logger.warning("lookup.parser provider=%s error=%r", self.provider, exc)
            return self.failure(f"unexpected payload: {exc.__class__.__name__}")

    def parse(self, payload: Any) -> ParseOutcome:
        raise NotImplementedError

    def failure(self, reason: str) -> ParseFailure:
        return ParseFailure(provider=self.provider, reason=reason)


class NIHClinicalTablesParser(ProviderParser):
    """``[total, [codes], extra, [[code, name], ...]]``"""

    provider = "NIH Clinical Tables"

    def parse(self, payload: Any) -> ParseOutcome:
        if not isinstance(payload, list) or len(payload) < 4:
            return self.failure("expected a 4-element array")

        display_rows = payload[3]
        if display_rows is None:
            return []
        if not isinstance(display_rows, list):
            return self.failure("display rows are not a list")

        entries: list[CodeEntry] = []
        for row in display_rows:
            if not isinstance(row, (list, tuple)) or len(row) < 2:
                continue
            entries.append(CodeEntry(code=_text(row[0]), description=_text(row[1])))
        return clean_entries(entries)


class ICD10APIParser(ProviderParser):
    """List of objects using ``code``/``icd10_code`` and ``desc``/``description``/``name``."""

    provider = "ICD-10 API.com"

    def parse(self, payload: Any) -> ParseOutcome:
        if payload is None:
            return []
        if not isinstance(payload, list):
            return self.failure("expected a list of codes")

        entries: list[CodeEntry] = []
        for item in payload:
            if not isinstance(item, dict):
                continue
            code = _text(item.get("code")) or _text(item.get("icd10_code"))
            description = (
                _text(item.get("desc"))
                or _text(item.get("description"))
                or _text(item.get("name"))
            )
            entries.append(CodeEntry(code=code, description=description))
        return clean_entries(entries)


class WHOICDParser(ProviderParser):
    """``{"destinationEntities": [{"theCode": ..., "title": ...}]}``"""

    provider = "WHO ICD API"

    def parse(self, payload: Any) -> ParseOutcome:
        if not isinstance(payload, dict):
            return self.failure("expected an object")

        entities = payload.get("destinationEntities")
        if entities is None:
            return []
        if not isinstance(entities, list):
            return self.failure("destinationEntities is not a list")

        entries: list[CodeEntry] = []
        for entity in entities:
            if not isinstance(entity, dict):
                continue
            title = _HIGHLIGHT_RE.sub("", _text(entity.get("title")))
            entries.append(CodeEntry(code=_text(entity.get("theCode")), description=title))
        return clean_entries(entries)


class OpenFDALabelParser(ProviderParser):
    """Keyword extraction over ``results[].indications_and_usage[]``.

    Approximate by nature: the label text is free prose, so matches are
    reported under the placeholder code ``MED_CONDITION``.
    """

    provider = "OpenFDA Drug API"

    def parse(self, payload: Any) -> ParseOutcome:
        if not isinstance(payload, dict):
            return self.failure("expected an object")

        results = payload.get("results")
        if results is None:
            return []
        if not isinstance(results, list):
            return self.failure("results is not a list")

        entries: list[CodeEntry] = []
        for result in results:
            if not isinstance(result, dict):
                continue
            indications = result.get("indications_and_usage") or []
            if isinstance(indications, str):
                indications = [indications]
            if not isinstance(indications, list):
                continue
            for indication in indications:
                if not isinstance(indication, str):
                    continue
                for match in _CONDITION_RE.findall(indication):
                    keyword = match.lower()
                    entries.append(
                        CodeEntry(code=MED_CONDITION_CODE, description=f"{keyword} (medical condition)")
                    )
        return clean_entries(entries)
