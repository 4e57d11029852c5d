"""Source chain resolver.

A chain is an ordered list of lookup strategies (the local table and remote
adapters).  :func:`first_success` walks the list and stops at the first
strategy that yields at least one entry; the chain order is configuration,
not code structure.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Iterable, Mapping, Optional, Sequence

from pharma_core.core.lookup_config import BatchThrottle
from pharma_core.lookup.adapters import RemoteSourceAdapter
from pharma_core.lookup.local_mapping import LocalMappingTable
from pharma_core.lookup.models import CodeEntry, ResolutionResult

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

class LookupStrategy:
    name: str = ""
    is_remote: bool = False

    async def lookup(self, term: str) -> list[CodeEntry]:
        raise NotImplementedError


class LocalMappingStrategy(LookupStrategy):
    def __init__(self, table: LocalMappingTable, name: str) -> None:
        self.table = table
        self.name = name

    async def lookup(self, term: str) -> list[CodeEntry]:
        return self.table.match(term)


class RemoteSourceStrategy(LookupStrategy):
    is_remote = True

    def __init__(self, adapter: RemoteSourceAdapter) -> None:
        self.adapter = adapter
        self.name = adapter.name

    async def lookup(self, term: str) -> list[CodeEntry]:
        return await self.adapter.fetch(term)


# ---------------------------------------------------------------------------
# Combinator
# ---------------------------------------------------------------------------

async def first_success(
    strategies: Sequence[LookupStrategy],
    term: str,
    *,
    cap: Optional[int] = None,
    delay_between: float = 0.0,
    sleep: SleepFn = asyncio.sleep,
) -> ResolutionResult:
    """Return the first non-empty strategy result, truncated to ``cap``.

    ``delay_between`` is only used by batch jobs: it pauses between an
    unsuccessful remote try and the next remote strategy.
    """
    previous_remote_missed = False
    for strategy in strategies:
        if strategy.is_remote and previous_remote_missed and delay_between > 0:
            await sleep(delay_between)

        entries = await strategy.lookup(term)
        if entries:
            if cap is not None:
                entries = entries[:cap]
            return ResolutionResult(entries=tuple(entries), source=strategy.name)

        if strategy.is_remote:
            previous_remote_missed = True

    return ResolutionResult.empty()


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------

class SourceChainResolver:
    def __init__(self, name: str, strategies: Iterable[LookupStrategy], *, cap: int) -> None:
        self.name = name
        self.strategies: tuple[LookupStrategy, ...] = tuple(strategies)
        self.cap = cap

    @property
    def source_names(self) -> list[str]:
        return [s.name for s in self.strategies]

    async def resolve(
        self,
        term: str,
        *,
        delay_between: float = 0.0,
        sleep: SleepFn = asyncio.sleep,
    ) -> ResolutionResult:
        term = (term or "").strip()
        if not term:
            return ResolutionResult.empty()

        t0 = time.perf_counter()
        result = await first_success(
            self.strategies,
            term,
            cap=self.cap,
            delay_between=delay_between,
            sleep=sleep,
        )
        logger.info(
            "lookup.resolve chain=%s term=%r source=%s results=%s duration_ms=%.2f",
            self.name,
            term,
            result.source,
            len(result.entries),
            (time.perf_counter() - t0) * 1000,
        )
        return result

    async def resolve_batch(
        self,
        items: Mapping[str, Sequence[str]],
        *,
        throttle: BatchThrottle,
        sleep: SleepFn = asyncio.sleep,
    ) -> dict[str, ResolutionResult]:
        """Resolve many items sequentially with rate-limit pauses.

        ``items`` maps an item key (e.g. a drug name) to candidate search
        terms tried in order; the first term that resolves wins for that item.
        """
        resolved: dict[str, ResolutionResult] = {}
        total = len(items)
        for processed, (key, terms) in enumerate(items.items(), start=1):
            result = ResolutionResult.empty()
            for term in terms:
                result = await self.resolve(term, delay_between=throttle.delay_seconds, sleep=sleep)
                if result.found:
                    break
            resolved[key] = result

            if processed < total:
                await sleep(throttle.delay_after(processed))

        return resolved
