import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from pharma_core.core.lookup_config import BatchThrottle, ChainConfig
from pharma_core.lookup.chains import build_resolver
from pharma_core.lookup.local_mapping import LocalMappingTable
from pharma_core.lookup.models import CodeEntry, SourceDescriptor
from pharma_core.lookup.resolver import LookupStrategy, SourceChainResolver, first_success


class _FakeStrategy(LookupStrategy):
    def __init__(self, name: str, entries: list[CodeEntry], *, is_remote: bool = True) -> None:
        self.name = name
        self.is_remote = is_remote
        self.entries = entries
        self.calls: list[str] = []

    async def lookup(self, term: str) -> list[CodeEntry]:
        self.calls.append(term)
        return list(self.entries)


class _SleepRecorder:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def _entries(n: int, prefix: str = "X") -> list[CodeEntry]:
    return [CodeEntry(f"{prefix}{i}", f"condition {i}") for i in range(n)]


class FirstSuccessTests(unittest.IsolatedAsyncioTestCase):
    async def test_first_non_empty_wins_and_later_sources_are_untouched(self) -> None:
        empty = _FakeStrategy("NIH Clinical Tables", [])
        winner = _FakeStrategy("ICD-10 API.com", _entries(2))
        later = _FakeStrategy("WHO ICD API", _entries(1, "W"))

        result = await first_success([empty, winner, later], "metformin")

        self.assertEqual(result.source, "ICD-10 API.com")
        self.assertEqual(len(result.entries), 2)
        self.assertEqual(empty.calls, ["metformin"])
        self.assertEqual(later.calls, [])

    async def test_all_empty_resolves_to_none(self) -> None:
        result = await first_success([_FakeStrategy("a", []), _FakeStrategy("b", [])], "unknown")
        self.assertEqual(result.entries, ())
        self.assertEqual(result.source, "None")
        self.assertEqual(result.as_dict(), {"results": [], "source": "None"})

    async def test_cap_truncates(self) -> None:
        result = await first_success([_FakeStrategy("a", _entries(15))], "x", cap=10)
        self.assertEqual(len(result.entries), 10)

    async def test_delay_only_between_missed_remote_sources(self) -> None:
        sleep = _SleepRecorder()
        strategies = [
            _FakeStrategy("Local Fallback", [], is_remote=False),
            _FakeStrategy("a", []),
            _FakeStrategy("b", []),
            _FakeStrategy("c", _entries(1)),
        ]
        await first_success(strategies, "x", delay_between=0.5, sleep=sleep)
        self.assertEqual(sleep.delays, [0.5, 0.5])

    async def test_interactive_resolution_never_sleeps(self) -> None:
        sleep = _SleepRecorder()
        await first_success([_FakeStrategy("a", []), _FakeStrategy("b", [])], "x", sleep=sleep)
        self.assertEqual(sleep.delays, [])


class SourceChainResolverTests(unittest.IsolatedAsyncioTestCase):
    async def test_empty_term_never_invokes_strategies(self) -> None:
        strategy = _FakeStrategy("a", _entries(1))
        resolver = SourceChainResolver("test", [strategy], cap=5)

        result = await resolver.resolve("   ")

        self.assertEqual(result.source, "None")
        self.assertEqual(strategy.calls, [])

    async def test_same_term_same_upstream_same_source(self) -> None:
        resolver = SourceChainResolver("test", [_FakeStrategy("a", []), _FakeStrategy("b", _entries(3))], cap=5)
        first = await resolver.resolve("aspirin")
        second = await resolver.resolve("aspirin")
        self.assertEqual(first, second)
        self.assertEqual(first.source, "b")

    async def test_batch_tries_terms_in_order_and_throttles_between_items(self) -> None:
        class _TermAware(LookupStrategy):
            name = "NIH Clinical Tables"
            is_remote = True

            def __init__(self) -> None:
                self.calls: list[str] = []

            async def lookup(self, term: str) -> list[CodeEntry]:
                self.calls.append(term)
                return _entries(1) if term.startswith("Glucophage") else []

        strategy = _TermAware()
        resolver = SourceChainResolver("batch_enrichment", [strategy], cap=3)
        sleep = _SleepRecorder()
        items = {f"Drug {i}": [f"drug{i}"] for i in range(1, 12)}
        items["Glucophage 500mg"] = ["metformin", "Glucophage 500mg"]

        resolved = await resolver.resolve_batch(
            items,
            throttle=BatchThrottle(delay_seconds=0.5, pause_every=10, pause_seconds=2.0),
            sleep=sleep,
        )

        self.assertEqual(len(resolved), 12)
        self.assertTrue(resolved["Glucophage 500mg"].found)
        self.assertFalse(resolved["Drug 1"].found)
        self.assertEqual(strategy.calls[-2:], ["metformin", "Glucophage 500mg"])
        # 11 pauses between 12 items; the 10th item is followed by the long pause.
        self.assertEqual(len(sleep.delays), 11)
        self.assertEqual(sleep.delays[9], 2.0)
        self.assertEqual(sleep.delays.count(2.0), 1)


class BuildResolverTests(unittest.IsolatedAsyncioTestCase):
    def _descriptors(self) -> dict[str, SourceDescriptor]:
        return {
            "nih": SourceDescriptor(
                name="NIH Clinical Tables",
                query_builder=lambda term: f"https://example.test/nih?terms={term}",
                parser=lambda payload: [],
            ),
        }

    def test_local_first_is_tagged_local_mapping(self) -> None:
        table = LocalMappingTable({"metformin": [("E11.9", "Type 2 diabetes mellitus without complications")]})
        resolver = build_resolver(
            "icd10_live",
            ChainConfig(order=("local", "nih"), cap=10),
            client=None,  # type: ignore[arg-type]
            descriptors=self._descriptors(),
            local_table=table,
        )
        self.assertEqual(resolver.source_names, ["Local Mapping", "NIH Clinical Tables"])

    def test_local_after_remote_is_tagged_local_fallback(self) -> None:
        table = LocalMappingTable({"metformin": [("E11.9", "Type 2 diabetes mellitus without complications")]})
        resolver = build_resolver(
            "icd10_live",
            ChainConfig(order=("nih", "local"), cap=10),
            client=None,  # type: ignore[arg-type]
            descriptors=self._descriptors(),
            local_table=table,
        )
        self.assertEqual(resolver.source_names, ["NIH Clinical Tables", "Local Fallback"])

    def test_unknown_strategy_names_are_skipped(self) -> None:
        resolver = build_resolver(
            "drug_icd",
            ChainConfig(order=("nih", "nonexistent", "local"), cap=8),
            client=None,  # type: ignore[arg-type]
            descriptors=self._descriptors(),
        )
        self.assertEqual(resolver.source_names, ["NIH Clinical Tables"])


if __name__ == "__main__":
    unittest.main()
