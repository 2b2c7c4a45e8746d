"""Batch orchestration, pacing, compliance roll-ups and engine wiring."""

from .batch import BatchOrchestrator, normalize_activities
from .compliance import aggregate, aggregate_assessments, summarize_register
from .pacing import MinIntervalPacer
from .runtime import Engine, build_engine, generate_run_id

__all__ = [
    "BatchOrchestrator",
    "Engine",
    "MinIntervalPacer",
    "aggregate",
    "aggregate_assessments",
    "build_engine",
    "generate_run_id",
    "normalize_activities",
    "summarize_register",
]
