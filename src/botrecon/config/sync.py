"""Defaults for reconciliation runs."""

from __future__ import annotations

from dataclasses import dataclass

from botrecon.domain.delivery import DEFAULT_BATCH_SIZE, DEFAULT_PAGE_SIZE
from botrecon.domain.delivery.pipeline import DEFAULT_PROGRESS_EVERY


@dataclass(frozen=True, slots=True)
class SyncConfig:
    page_size: int = DEFAULT_PAGE_SIZE
    batch_size: int = DEFAULT_BATCH_SIZE
    progress_every: int = DEFAULT_PROGRESS_EVERY


def get_sync_config() -> SyncConfig:
    return SyncConfig()
