"""Value types shared by the code lookup subsystem."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Sequence, Union

LOCAL_MAPPING_SOURCE = "Local Mapping"
LOCAL_FALLBACK_SOURCE = "Local Fallback"
NO_SOURCE = "None"


@dataclass(frozen=True)
class CodeEntry:
    """Normalized diagnosis code result."""

    code: str
    description: str

    def as_dict(self) -> dict[str, str]:
        return {"code": self.code, "description": self.description}


@dataclass(frozen=True)
class ParseFailure:
    """Returned by a provider parser when the payload has an unexpected shape."""

    provider: str
    reason: str


ParseOutcome = Union[list[CodeEntry], ParseFailure]


@dataclass(frozen=True)
class SourceDescriptor:
    """Static description of one remote provider."""

    name: str
    query_builder: Callable[[str], str]
    parser: Callable[[Any], ParseOutcome]
    timeout: float = 5.0


@dataclass(frozen=True)
class ResolutionResult:
    entries: tuple[CodeEntry, ...] = field(default_factory=tuple)
    source: str = NO_SOURCE

    @classmethod
    def empty(cls) -> "ResolutionResult":
        return cls(entries=(), source=NO_SOURCE)

    @property
    def found(self) -> bool:
        return bool(self.entries)

    def as_dict(self) -> dict[str, Any]:
        return {
            "results": [entry.as_dict() for entry in self.entries],
            "source": self.source,
        }


def clean_entries(entries: Sequence[CodeEntry]) -> list[CodeEntry]:
    """Drop blank and repeated entries, keeping first occurrence order."""
    seen: set[CodeEntry] = set()
    cleaned: list[CodeEntry] = []
    for entry in entries:
        code = (entry.code or "").strip()
        description = (entry.description or "").strip()
        candidate = CodeEntry(code=code, description=description)
        if not code or not description or candidate in seen:
            continue
        seen.add(candidate)
        cleaned.append(candidate)
    return cleaned
