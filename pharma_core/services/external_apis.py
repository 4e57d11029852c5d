"""Clients for the public pharmaceutical APIs (OpenFDA, RxNorm, ChEMBL).

Every client call returns a :class:`ProviderOutcome`.  Upstream problems
(timeouts, network errors, non-2xx answers, invalid JSON) are logged and
reported as an empty outcome with ``note="unavailable"``; callers never see
an exception or upstream error details.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Dict, Iterable, List, Mapping, Optional, Sequence
from urllib.parse import quote

import httpx

from pharma_core.core.lookup_config import UpstreamTimeouts, upstream_timeouts

logger = logging.getLogger(__name__)

OPENFDA_BASE_URL = "https://api.fda.gov"
RXNORM_BASE_URL = "https://rxnav.nlm.nih.gov/REST"
CHEMBL_BASE_URL = "https://www.ebi.ac.uk/chembl/api/data"

UNAVAILABLE_NOTE = "unavailable"
NO_RESULTS_NOTE = "no_results"
UNKNOWN = "Unknown"
NOT_AVAILABLE = "Not available"

DEFAULT_COMBINED_APIS = ("openfda", "rxnorm", "chembl")


class UpstreamUnavailableError(RuntimeError):
    """Raised inside a client when an upstream call cannot produce a payload."""


@dataclass(frozen=True)
class ProviderOutcome:
    source: str
    items: tuple = field(default_factory=tuple)
    note: Optional[str] = None

    @property
    def total(self) -> int:
        return len(self.items)

    @classmethod
    def unavailable(cls, source: str) -> "ProviderOutcome":
        return cls(source=source, items=(), note=UNAVAILABLE_NOTE)

    def as_dict(self, items_key: str = "items") -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "source": self.source,
            items_key: list(self.items),
            "total": self.total,
        }
        if self.note:
            payload["note"] = self.note
        return payload


def _first(value: Any, default: Any = UNKNOWN) -> Any:
    if isinstance(value, list):
        return value[0] if value else default
    return value if value not in (None, "") else default


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


class JSONProviderClient:
    source = ""

    def __init__(self, client: httpx.AsyncClient, *, base_url: str, timeout: float) -> None:
        self._client = client
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def _get_json(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """GET ``path`` and decode JSON; a 404 means "no hits" and returns None."""
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = await self._client.get(url, params=params, timeout=self.timeout)
        except httpx.TimeoutException as exc:
            logger.warning("external.%s outcome=timeout url=%s", self.source, url)
            raise UpstreamUnavailableError("timeout") from exc
        except httpx.HTTPError as exc:
            logger.warning("external.%s outcome=network_error url=%s error=%s", self.source, url, exc)
            raise UpstreamUnavailableError("network error") from exc

        if response.status_code == 404:
            return None
        if not response.is_success:
            logger.warning("external.%s outcome=http_error url=%s status=%s", self.source, url, response.status_code)
            raise UpstreamUnavailableError(f"status {response.status_code}")

        try:
            return response.json()
        except ValueError as exc:
            logger.warning("external.%s outcome=invalid_json url=%s", self.source, url)
            raise UpstreamUnavailableError("invalid json") from exc


# ---------------------------------------------------------------------------
# OpenFDA
# ---------------------------------------------------------------------------

def _label_search_expressions(drug: str) -> List[str]:
    return [
        f'openfda.brand_name.exact:"{drug}" OR openfda.generic_name.exact:"{drug}"',
        f'openfda.brand_name:"{drug}" OR openfda.generic_name:"{drug}" OR openfda.substance_name:"{drug}"',
        f"openfda.generic_name:{drug}* OR openfda.brand_name:{drug}* OR openfda.substance_name:{drug}*",
        f'indications_and_usage:"{drug}" OR description:"{drug}"',
    ]


def _event_search_expressions(drug: str) -> List[str]:
    return [
        f'patient.drug.medicinalproduct.exact:"{drug}"',
        f'patient.drug.medicinalproduct:"{drug}"',
        f'patient.drug.openfda.substance_name:"{drug}" OR patient.drug.openfda.generic_name:"{drug}"',
        f'patient.reaction.reactionmeddrapt:"{drug}"',
    ]


def normalize_label(label: Any, *, summary: bool = False) -> Dict[str, Any]:
    label = _as_dict(label)
    openfda = _as_dict(label.get("openfda"))
    normalized = {
        "brandName": _first(openfda.get("brand_name")),
        "genericName": _first(openfda.get("generic_name")),
        "manufacturer": _first(openfda.get("manufacturer_name")),
        "dosageForm": _first(openfda.get("dosage_form")),
    }
    if summary:
        return normalized
    normalized.update(
        {
            "route": _first(openfda.get("route")),
            "indications": _first(label.get("indications_and_usage"), NOT_AVAILABLE),
            "contraindications": _first(label.get("contraindications"), NOT_AVAILABLE),
            "warnings": _first(label.get("warnings"), NOT_AVAILABLE),
            "adverseReactions": _first(label.get("adverse_reactions"), NOT_AVAILABLE),
        }
    )
    return normalized


def normalize_adverse_event(event: Any) -> Dict[str, Any]:
    event = _as_dict(event)
    patient = _as_dict(event.get("patient"))
    return {
        "receiptDate": event.get("receiptdate"),
        "serious": event.get("serious"),
        "patientAge": patient.get("patientonsetage") or UNKNOWN,
        "patientSex": patient.get("patientsex") or UNKNOWN,
        "reactions": [
            {"term": r.get("reactionmeddrapt"), "outcome": r.get("reactionoutcome")}
            for r in _as_list(patient.get("reaction"))
            if isinstance(r, dict)
        ],
    }


class OpenFDAClient(JSONProviderClient):
    source = "OpenFDA"

    async def _search(self, path: str, expressions: Sequence[str], limit: int) -> tuple[List[Any], Optional[str]]:
        """Try each search expression in turn; 404 moves on, an error is remembered."""
        last_error: Optional[UpstreamUnavailableError] = None
        for expression in expressions:
            try:
                payload = await self._get_json(path, {"search": expression, "limit": limit})
            except UpstreamUnavailableError as exc:
                last_error = exc
                continue
            if payload is None:
                continue
            return _as_list(_as_dict(payload).get("results")), None

        if last_error is not None:
            return [], UNAVAILABLE_NOTE
        return [], NO_RESULTS_NOTE

    async def drug_labels(self, drug: str, *, limit: int = 10, summary: bool = False) -> ProviderOutcome:
        results, note = await self._search("drug/label.json", _label_search_expressions(drug), limit)
        labels = tuple(normalize_label(label, summary=summary) for label in results)
        return ProviderOutcome(source=self.source, items=labels, note=note if not labels else None)

    async def adverse_events(self, drug: str, *, limit: int = 10) -> ProviderOutcome:
        results, note = await self._search("drug/event.json", _event_search_expressions(drug), limit)
        events = tuple(normalize_adverse_event(event) for event in results)
        return ProviderOutcome(source=self.source, items=events, note=note if not events else None)


# ---------------------------------------------------------------------------
# RxNorm
# ---------------------------------------------------------------------------

def normalize_concept_groups(payload: Any) -> List[Dict[str, Any]]:
    groups = _as_list(_as_dict(_as_dict(payload).get("drugGroup")).get("conceptGroup"))
    drugs = []
    for group in groups:
        for concept in _as_list(_as_dict(group).get("conceptProperties")):
            if not isinstance(concept, dict):
                continue
            drugs.append(
                {
                    "rxcui": concept.get("rxcui"),
                    "name": concept.get("name"),
                    "synonym": concept.get("synonym"),
                    "tty": concept.get("tty"),
                    "language": concept.get("language"),
                }
            )
    return drugs


def normalize_interaction_groups(payload: Any) -> List[Dict[str, Any]]:
    interactions = []
    for group in _as_list(_as_dict(payload).get("interactionTypeGroup")):
        for interaction_type in _as_list(_as_dict(group).get("interactionType")):
            interactions.extend(_pairs(_as_dict(interaction_type).get("interactionPair")))
        interactions.extend(_pairs(_as_dict(group).get("interactionPair")))
    return interactions


def _pairs(raw: Any) -> List[Dict[str, Any]]:
    pairs = []
    for pair in _as_list(raw):
        pair = _as_dict(pair)
        concepts = _as_list(pair.get("interactionConcept"))
        concept = _as_dict(_as_dict(concepts[0]).get("minConceptItem")) if concepts else {}
        pairs.append(
            {
                "interactionConcept": concept,
                "severity": pair.get("severity") or UNKNOWN,
                "description": pair.get("description"),
            }
        )
    return pairs


class RxNormClient(JSONProviderClient):
    source = "RxNorm"

    async def search(self, drug: str) -> ProviderOutcome:
        try:
            payload = await self._get_json("drugs.json", {"name": drug})
        except UpstreamUnavailableError:
            return ProviderOutcome.unavailable(self.source)
        return ProviderOutcome(source=self.source, items=tuple(normalize_concept_groups(payload)))

    async def interactions(self, rxcui: str) -> ProviderOutcome:
        try:
            payload = await self._get_json("interaction/interaction.json", {"rxcui": rxcui})
        except UpstreamUnavailableError:
            return ProviderOutcome.unavailable(self.source)
        return ProviderOutcome(source=self.source, items=tuple(normalize_interaction_groups(payload)))


# ---------------------------------------------------------------------------
# ChEMBL
# ---------------------------------------------------------------------------

def normalize_molecule(molecule: Any) -> Dict[str, Any]:
    molecule = _as_dict(molecule)
    properties = _as_dict(molecule.get("molecule_properties"))
    return {
        "chemblId": molecule.get("molecule_chembl_id"),
        "prefName": molecule.get("pref_name"),
        "molecularFormula": properties.get("full_molformula") or properties.get("molecular_formula") or UNKNOWN,
        "molecularWeight": properties.get("full_mwt") or properties.get("molecular_weight") or UNKNOWN,
        "logp": properties.get("alogp") or UNKNOWN,
        "maxPhase": molecule.get("max_phase") or UNKNOWN,
        "therapeuticFlag": molecule.get("therapeutic_flag"),
        "moleculeType": molecule.get("molecule_type"),
    }


def normalize_mechanism(mechanism: Any) -> Dict[str, Any]:
    mechanism = _as_dict(mechanism)
    return {
        "targetName": mechanism.get("target_chembl_id"),
        "mechanismOfAction": mechanism.get("mechanism_of_action"),
        "actionType": mechanism.get("action_type"),
        "targetType": mechanism.get("target_type"),
    }


class ChEMBLClient(JSONProviderClient):
    source = "ChEMBL"

    async def search(self, drug: str, *, limit: int = 10) -> ProviderOutcome:
        params = {"pref_name__icontains": drug, "limit": limit, "format": "json"}
        try:
            payload = await self._get_json("molecule.json", params)
        except UpstreamUnavailableError:
            return ProviderOutcome.unavailable(self.source)
        molecules = _as_list(_as_dict(payload).get("molecules"))
        return ProviderOutcome(source=self.source, items=tuple(normalize_molecule(m) for m in molecules))

    async def targets(self, chembl_id: str) -> ProviderOutcome:
        try:
            payload = await self._get_json(f"molecule/{quote(chembl_id, safe='')}/mechanism.json", {"format": "json"})
        except UpstreamUnavailableError:
            return ProviderOutcome.unavailable(self.source)
        mechanisms = _as_list(_as_dict(payload).get("mechanisms"))
        return ProviderOutcome(source=self.source, items=tuple(normalize_mechanism(m) for m in mechanisms))


# ---------------------------------------------------------------------------
# Combined search
# ---------------------------------------------------------------------------

@dataclass
class ExternalAPIs:
    openfda: OpenFDAClient
    rxnorm: RxNormClient
    chembl: ChEMBLClient

    @classmethod
    def build(cls, client: httpx.AsyncClient, timeouts: UpstreamTimeouts = upstream_timeouts) -> "ExternalAPIs":
        return cls(
            openfda=OpenFDAClient(client, base_url=OPENFDA_BASE_URL, timeout=timeouts.openfda),
            rxnorm=RxNormClient(client, base_url=RXNORM_BASE_URL, timeout=timeouts.rxnorm),
            chembl=ChEMBLClient(client, base_url=CHEMBL_BASE_URL, timeout=timeouts.chembl),
        )

    @staticmethod
    def base_urls() -> Dict[str, str]:
        return {"openFDA": OPENFDA_BASE_URL, "rxNorm": RXNORM_BASE_URL, "chembl": CHEMBL_BASE_URL}

    async def combined_search(self, drug: str, apis: Iterable[str] = DEFAULT_COMBINED_APIS) -> Dict[str, Any]:
        """Query the selected providers concurrently.

        Returns ``{block name: outcome dict}``.  A provider that raises
        unexpectedly still contributes an empty ``unavailable`` block.
        """
        wanted = {name.strip().lower() for name in apis if name and name.strip()}
        calls: Dict[str, tuple[str, Awaitable[ProviderOutcome]]] = {}
        if "openfda" in wanted:
            calls["openFDA"] = (self.openfda.source, self.openfda.drug_labels(drug, limit=5, summary=True))
        if "rxnorm" in wanted:
            calls["rxNorm"] = (self.rxnorm.source, self.rxnorm.search(drug))
        if "chembl" in wanted:
            calls["chembl"] = (self.chembl.source, self.chembl.search(drug, limit=5))

        outcomes = await asyncio.gather(*(call for _, call in calls.values()), return_exceptions=True)

        blocks: Dict[str, Any] = {}
        for (block, (source, _)), outcome in zip(calls.items(), outcomes):
            if isinstance(outcome, BaseException):
                logger.error("external.combined provider=%s drug=%r failed", source, drug, exc_info=outcome)
                outcome = ProviderOutcome.unavailable(source)
            blocks[block] = outcome.as_dict()
        return blocks
