"""Merge precedence for reputation entries describing the same scope.

Rules, applied to ``merge_entries(existing, incoming)``:

1. A bot with a specific name upgrades a datacenter entry or a nameless entry.
   The bot's name, category and rating are adopted; a datacenter being upgraded
   keeps its name in the datacenter side channel.
2. A datacenter merged into a bot only attaches the datacenter side channel.
3. Two datacenters keep the specific name when only the incoming one has it.
4. Anything else keeps the existing entry unchanged.

Between two equally specific bot names the first writer wins; there is no
source ranking.
"""

from __future__ import annotations

from dataclasses import replace

from botrecon.domain.model import DatacenterTag, ReputationEntry


def merge_entries(existing: ReputationEntry | None, incoming: ReputationEntry) -> ReputationEntry:
    if existing is None:
        return incoming

    if incoming.is_bot and incoming.has_specific_name:
        if existing.is_datacenter:
            return replace(
                incoming,
                scope=existing.scope,
                datacenter=DatacenterTag(existing.name),
                provenance=_datacenter_provenance(incoming.provenance, existing.provenance),
            )
        if not existing.has_specific_name:
            return replace(
                existing,
                kind=incoming.kind,
                name=incoming.name,
                category=incoming.category,
                rating=incoming.rating,
                provenance=f"{existing.provenance} + {incoming.provenance}",
            )
        return existing

    if incoming.is_datacenter and existing.is_bot:
        known_name = existing.datacenter.name if existing.datacenter else None
        return replace(
            existing,
            datacenter=DatacenterTag(incoming.name or known_name),
            provenance=_datacenter_provenance(existing.provenance, incoming.provenance),
        )

    if incoming.is_datacenter and existing.is_datacenter:
        if not existing.has_specific_name and incoming.has_specific_name:
            return replace(existing, name=incoming.name)
        return existing

    return existing


def _datacenter_provenance(bot_provenance: str, datacenter_provenance: str) -> str:
    return f"{bot_provenance} (DC: {datacenter_provenance})"
