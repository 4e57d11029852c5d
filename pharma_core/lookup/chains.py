"""Build configured source chains from strategy names."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

import httpx

from pharma_core.core.lookup_config import ChainConfig, lookup_chains
from pharma_core.lookup.adapters import RemoteSourceAdapter
from pharma_core.lookup.local_mapping import LocalMappingTable
from pharma_core.lookup.models import LOCAL_FALLBACK_SOURCE, LOCAL_MAPPING_SOURCE, SourceDescriptor
from pharma_core.lookup.resolver import (
    LocalMappingStrategy,
    LookupStrategy,
    RemoteSourceStrategy,
    SourceChainResolver,
)
from pharma_core.lookup.sources import build_source_descriptors

logger = logging.getLogger(__name__)

LOCAL_STRATEGY = "local"


def build_resolver(
    name: str,
    config: ChainConfig,
    *,
    client: httpx.AsyncClient,
    descriptors: Mapping[str, SourceDescriptor],
    local_table: Optional[LocalMappingTable] = None,
) -> SourceChainResolver:
    strategies: list[LookupStrategy] = []
    for position, strategy_name in enumerate(config.order):
        if strategy_name == LOCAL_STRATEGY:
            if local_table is None:
                logger.warning("lookup.chain name=%s has no local table; skipping local strategy", name)
                continue
            # The local layer is a fast path when it leads the chain and a
            # fallback when remote sources are consulted first.
            tag = LOCAL_MAPPING_SOURCE if position == 0 else LOCAL_FALLBACK_SOURCE
            strategies.append(LocalMappingStrategy(local_table, name=tag))
            continue

        descriptor = descriptors.get(strategy_name)
        if descriptor is None:
            logger.warning("lookup.chain name=%s unknown strategy=%r; skipping", name, strategy_name)
            continue
        strategies.append(RemoteSourceStrategy(RemoteSourceAdapter(descriptor, client)))

    resolver = SourceChainResolver(name, strategies, cap=config.cap)
    logger.info("lookup.chain name=%s order=%s cap=%s", name, resolver.source_names, config.cap)
    return resolver


def build_resolvers(
    client: httpx.AsyncClient,
    *,
    local_tables: Mapping[str, LocalMappingTable],
    chains: Optional[Mapping[str, ChainConfig]] = None,
    descriptors: Optional[Mapping[str, SourceDescriptor]] = None,
) -> dict[str, SourceChainResolver]:
    """Return one resolver per configured chain, keyed by chain name."""
    chains = chains if chains is not None else lookup_chains.as_dict()
    descriptors = descriptors if descriptors is not None else build_source_descriptors()
    return {
        name: build_resolver(
            name,
            config,
            client=client,
            descriptors=descriptors,
            local_table=local_tables.get(name),
        )
        for name, config in chains.items()
    }
