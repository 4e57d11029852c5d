"""Read-only drug name -> code table used as the local lookup layer."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from pharma_core.lookup.models import CodeEntry, clean_entries


class LocalMappingTable:
    """Static in-memory mapping with bidirectional substring matching.

    An exact (case-insensitive) key wins outright.  Otherwise keys that
    contain the term, or are contained in it, match in table order: with
    ``merge_partial`` every matching key contributes its entries, without it
    only the first matching key does.
    """

    def __init__(self, rows: Mapping[str, Iterable[tuple[str, str]]], *, merge_partial: bool = True) -> None:
        self.merge_partial = merge_partial
        table: dict[str, tuple[CodeEntry, ...]] = {}
        for key, pairs in rows.items():
            normalized = key.strip().lower()
            if not normalized:
                continue
            table[normalized] = tuple(CodeEntry(code=code, description=description) for code, description in pairs)
        self._table = MappingProxyType(table)

    def matching_keys(self, term: str) -> list[str]:
        needle = (term or "").strip().lower()
        if not needle:
            return []
        if needle in self._table:
            return [needle]
        matches = [key for key in self._table if key in needle or needle in key]
        return matches if self.merge_partial else matches[:1]

    def match(self, term: str) -> list[CodeEntry]:
        entries: list[CodeEntry] = []
        for key in self.matching_keys(term):
            entries.extend(self._table[key])
        return clean_entries(entries)
