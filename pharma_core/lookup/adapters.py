"""Remote source adapters.

An adapter wraps exactly one external HTTP API: it builds the provider URL,
performs a single bounded GET and hands the JSON body to the provider parser.
Adapters never raise to the caller; every upstream problem is logged and
reported as an empty result.
"""

from __future__ import annotations

import logging

import httpx

from pharma_core.lookup.models import CodeEntry, ParseFailure, SourceDescriptor

logger = logging.getLogger(__name__)


class RemoteSourceAdapter:
    def __init__(self, descriptor: SourceDescriptor, client: httpx.AsyncClient) -> None:
        self.descriptor = descriptor
        self._client = client

    @property
    def name(self) -> str:
        return self.descriptor.name

    async def fetch(self, term: str) -> list[CodeEntry]:
        term = (term or "").strip()
        if not term:
            return []

        url = self.descriptor.query_builder(term)
        try:
            response = await self._client.get(url, timeout=self.descriptor.timeout)
        except httpx.TimeoutException:
            logger.warning("lookup.adapter name=%s outcome=timeout term=%r", self.name, term)
            return []
        except httpx.HTTPError as exc:
            logger.warning("lookup.adapter name=%s outcome=network_error term=%r error=%r", self.name, term, exc)
            return []

        if not response.is_success:
            logger.warning(
                "lookup.adapter name=%s outcome=http_status status=%s term=%r",
                self.name,
                response.status_code,
                term,
            )
            return []

        try:
            payload = response.json()
        except ValueError:
            logger.warning("lookup.adapter name=%s outcome=invalid_json term=%r", self.name, term)
            return []

        outcome = self.descriptor.parser(payload)
        if isinstance(outcome, ParseFailure):
            logger.warning(
                "lookup.adapter name=%s outcome=parse_failure reason=%s term=%r",
                self.name,
                outcome.reason,
                term,
            )
            return []

        logger.info("lookup.adapter name=%s outcome=ok results=%s term=%r", self.name, len(outcome), term)
        return outcome
