"""Shared fixtures: fake upstreams and a hand-built data context."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, List, Optional

import httpx

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pharma_core.core.config import settings
from pharma_core.main import create_app
from pharma_core.services.data_context import DataContext
from pharma_core.services.data_loader import load_formulary, load_icd10_codes, load_uae_drugs

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingUpstream:
    """MockTransport handler that records requests and delegates to ``respond``."""

    def __init__(self, respond: Optional[Handler] = None) -> None:
        self.requests: List[httpx.Request] = []
        self._respond = respond or (lambda request: httpx.Response(404, json={}))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    def hosts(self) -> List[str]:
        return [request.url.host for request in self.requests]


def timeout_everything(request: httpx.Request) -> httpx.Response:
    raise httpx.ReadTimeout("upstream timed out", request=request)


def mock_client(handler: Handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def bundled_context(handler: Optional[Handler] = None) -> DataContext:
    drugs, drugs_report = load_uae_drugs(settings.uae_drugs_csv)
    codes, codes_report = load_icd10_codes(settings.icd10_codes_json)
    medications, formulary_report = load_formulary(settings.daman_formulary_json)
    return DataContext.assemble(
        mock_client(handler or RecordingUpstream()),
        drugs=drugs,
        icd10_codes=codes,
        medications=medications,
        reports={r.name: r for r in (drugs_report, codes_report, formulary_report)},
    )


def make_app(context: DataContext):
    return create_app(context)
