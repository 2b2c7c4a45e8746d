"""Curated, read-only knowledge: activity profiles, trade defaults, safety codes."""

from .base import ActivityKnowledgeBase, KnowledgeBaseLoadError
from .repository import KnowledgeRepository, load_default_repository, load_repository
from .safety_codes import SafetyCode, SafetyCodeRegistry
from .trade_defaults import TradeDefaults, TradeTable

__all__ = [
    "ActivityKnowledgeBase",
    "KnowledgeBaseLoadError",
    "KnowledgeRepository",
    "SafetyCode",
    "SafetyCodeRegistry",
    "TradeDefaults",
    "TradeTable",
    "load_default_repository",
    "load_repository",
]
