"""Thin proxy client for a SNOMED CT Snowstorm terminology server."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

DEFAULT_ACCEPT_LANGUAGE = "en-x-900000000000509007,en;q=0.8"


@dataclass(frozen=True)
class SnomedResponse:
    success: bool
    data: Any = None
    status_code: int = 200

    def as_dict(self) -> Dict[str, Any]:
        return {"success": self.success, "data": self.data}


class SnomedClient:
    def __init__(self, client: httpx.AsyncClient, *, base_url: str, branch: str, timeout: float) -> None:
        self._client = client
        self.base_url = base_url.rstrip("/")
        self.branch = branch
        self.timeout = timeout

    @property
    def _branch_path(self) -> str:
        # Nested branches such as MAIN/SNOMEDCT-US travel as one path segment.
        return quote(self.branch, safe="")

    async def _get(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        accept_language: Optional[str] = None,
    ) -> SnomedResponse:
        url = f"{self.base_url}/{path}"
        headers = {"Accept-Language": accept_language or DEFAULT_ACCEPT_LANGUAGE}
        clean_params = {k: v for k, v in (params or {}).items() if v is not None}
        try:
            response = await self._client.get(url, params=clean_params, headers=headers, timeout=self.timeout)
        except httpx.HTTPError as exc:
            logger.warning("snomed.request outcome=error url=%s error=%s", url, exc)
            return SnomedResponse(success=False, status_code=502)

        if not response.is_success:
            logger.warning("snomed.request outcome=http_error url=%s status=%s", url, response.status_code)
            return SnomedResponse(success=False, status_code=404 if response.status_code == 404 else 502)

        try:
            data = response.json()
        except ValueError:
            logger.warning("snomed.request outcome=invalid_json url=%s", url)
            return SnomedResponse(success=False, status_code=502)
        return SnomedResponse(success=True, data=data, status_code=response.status_code)

    async def health(self) -> Dict[str, Any]:
        result = await self._get("codesystems")
        payload: Dict[str, Any] = {
            "success": result.success,
            "baseUrl": self.base_url,
            "branch": self.branch,
        }
        if result.success:
            data = result.data
            if isinstance(data, list):
                count = len(data)
            elif isinstance(data, dict) and isinstance(data.get("items"), list):
                count = len(data["items"])
            else:
                count = 0
            payload.update({"statusCode": result.status_code, "codesystems": count})
        return payload

    async def search_concepts(
        self,
        *,
        term: Optional[str] = None,
        ecl: Optional[str] = None,
        active_filter: Optional[bool] = None,
        limit: int = 50,
        offset: int = 0,
        accept_language: Optional[str] = None,
    ) -> SnomedResponse:
        params = {
            "term": term,
            "ecl": ecl,
            "activeFilter": None if active_filter is None else str(active_filter).lower(),
            "limit": limit,
            "offset": offset,
        }
        return await self._get(f"{self._branch_path}/concepts", params=params, accept_language=accept_language)

    async def concept(self, concept_id: str, *, accept_language: Optional[str] = None) -> SnomedResponse:
        path = f"browser/{self._branch_path}/concepts/{quote(concept_id, safe='')}"
        return await self._get(path, accept_language=accept_language)

    async def children(self, concept_id: str, *, form: str = "inferred", accept_language: Optional[str] = None) -> SnomedResponse:
        path = f"browser/{self._branch_path}/concepts/{quote(concept_id, safe='')}/children"
        return await self._get(path, params={"form": form}, accept_language=accept_language)

    async def parents(self, concept_id: str, *, form: str = "inferred", accept_language: Optional[str] = None) -> SnomedResponse:
        path = f"browser/{self._branch_path}/concepts/{quote(concept_id, safe='')}/parents"
        return await self._get(path, params={"form": form}, accept_language=accept_language)

    async def ancestors(self, concept_id: str, *, form: str = "inferred", accept_language: Optional[str] = None) -> SnomedResponse:
        path = f"browser/{self._branch_path}/concepts/{quote(concept_id, safe='')}/ancestors"
        return await self._get(path, params={"form": form}, accept_language=accept_language)

    async def search_descriptions(
        self,
        *,
        term: Optional[str] = None,
        active: bool = True,
        limit: int = 50,
        offset: int = 0,
        semantic_tag: Optional[str] = None,
        concept_active: Optional[bool] = None,
        accept_language: Optional[str] = None,
    ) -> SnomedResponse:
        params = {
            "term": term,
            "active": str(active).lower(),
            "limit": limit,
            "offset": offset,
            "semanticTag": semantic_tag,
            "conceptActive": None if concept_active is None else str(concept_active).lower(),
        }
        return await self._get(f"browser/{self._branch_path}/descriptions", params=params, accept_language=accept_language)

    async def ecl(
        self,
        expression: str,
        *,
        limit: int = 50,
        offset: int = 0,
        form: str = "inferred",
        return_id_only: bool = False,
        accept_language: Optional[str] = None,
    ) -> SnomedResponse:
        params = {
            "ecl": expression,
            "limit": limit,
            "offset": offset,
            "form": form,
            "returnIdOnly": str(return_id_only).lower(),
        }
        return await self._get(f"{self._branch_path}/concepts", params=params, accept_language=accept_language)
