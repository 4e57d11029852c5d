"""Lookup configuration for Pharma Core.

Centralizes source-chain ordering, result caps, upstream timeouts and batch
throttling for the code lookup subsystem.  All values are loaded from
environment variables with sensible defaults so the system works
out-of-the-box.

Chain orders are comma-separated strategy names, e.g.
``LOOKUP_CHAIN_ICD10_LIVE="nih,icd10api,who,local"``.  Known strategy names:
``local``, ``nih``, ``icd10api``, ``who``, ``openfda_label``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Tuple


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        return default


def _env_list(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    items = tuple(part.strip().lower() for part in raw.split(",") if part.strip())
    return items or default


# ---------------------------------------------------------------------------
# Source chains
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ChainConfig:
    """Ordered strategy names plus the result cap for one endpoint."""

    order: Tuple[str, ...]
    cap: int


def _chain(name: str, order: Tuple[str, ...], cap: int) -> ChainConfig:
    key = name.upper()
    return ChainConfig(
        order=_env_list(f"LOOKUP_CHAIN_{key}", order),
        cap=max(_env_int(f"LOOKUP_CAP_{key}", cap), 1),
    )


@dataclass(frozen=True)
class LookupChains:
    """Per-endpoint chain definitions.

    Every endpoint follows the same policy (local table first, then remote
    sources in priority order); only the data differs.
    """

    icd10_live: ChainConfig = field(
        default_factory=lambda: _chain("icd10_live", ("local", "nih", "icd10api", "who"), 10),
    )
    drug_icd: ChainConfig = field(
        default_factory=lambda: _chain("drug_icd", ("local", "nih"), 8),
    )
    batch_enrichment: ChainConfig = field(
        default_factory=lambda: _chain("batch_enrichment", ("nih", "openfda_label"), 3),
    )

    def as_dict(self) -> Dict[str, ChainConfig]:
        return {
            "icd10_live": self.icd10_live,
            "drug_icd": self.drug_icd,
            "batch_enrichment": self.batch_enrichment,
        }


# ---------------------------------------------------------------------------
# Upstream timeouts (seconds)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UpstreamTimeouts:
    """Per-call HTTP timeouts for every upstream provider."""

    nih: float = field(default_factory=lambda: _env_float("LOOKUP_TIMEOUT_NIH", 5.0))
    icd10api: float = field(default_factory=lambda: _env_float("LOOKUP_TIMEOUT_ICD10API", 5.0))
    who: float = field(default_factory=lambda: _env_float("LOOKUP_TIMEOUT_WHO", 5.0))
    openfda_label: float = field(default_factory=lambda: _env_float("LOOKUP_TIMEOUT_OPENFDA_LABEL", 10.0))
    openfda: float = field(default_factory=lambda: _env_float("EXTERNAL_TIMEOUT_OPENFDA", 10.0))
    rxnorm: float = field(default_factory=lambda: _env_float("EXTERNAL_TIMEOUT_RXNORM", 10.0))
    chembl: float = field(default_factory=lambda: _env_float("EXTERNAL_TIMEOUT_CHEMBL", 15.0))


# ---------------------------------------------------------------------------
# Batch throttling
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BatchThrottle:
    """Fixed delays used by offline enrichment to respect upstream rate limits."""

    delay_seconds: float = field(default_factory=lambda: _env_float("BATCH_DELAY_SECONDS", 0.5))
    pause_every: int = field(default_factory=lambda: _env_int("BATCH_PAUSE_EVERY", 10))
    pause_seconds: float = field(default_factory=lambda: _env_float("BATCH_PAUSE_SECONDS", 2.0))

    def delay_after(self, processed: int) -> float:
        if self.pause_every > 0 and processed % self.pause_every == 0:
            return self.pause_seconds
        return self.delay_seconds


# ---------------------------------------------------------------------------
# Singleton instances (importable)
# ---------------------------------------------------------------------------

lookup_chains = LookupChains()
upstream_timeouts = UpstreamTimeouts()
batch_throttle = BatchThrottle()
