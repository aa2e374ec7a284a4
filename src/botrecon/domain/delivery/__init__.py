"""Paginated fetch, retrying transport and batched delivery."""

from __future__ import annotations

from .pipeline import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_PAGE_SIZE,
    PipelineSettings,
    ReadAbortedError,
    ReconciliationPipeline,
)
from .retry import BackoffPolicy, DeliveryError, RetryBudgetExceededError, call_with_retry
from .stats import RunStats

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_PAGE_SIZE",
    "BackoffPolicy",
    "DeliveryError",
    "PipelineSettings",
    "ReadAbortedError",
    "ReconciliationPipeline",
    "RetryBudgetExceededError",
    "RunStats",
    "call_with_retry",
]
