from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from swms_risk.knowledge.base import ActivityKnowledgeBase
from swms_risk.models.risk import RiskProfile

MATCH_EXACT = "exact"
MATCH_FUZZY = "fuzzy"
UNRESOLVED = "unresolved"


@dataclass(slots=True)
class Resolution:
    """Outcome of resolving one requested activity against the knowledge base."""

    requested: str
    profile: Optional[RiskProfile] = None
    matched_key: Optional[str] = None
    match_type: str = UNRESOLVED

    @property
    def resolved(self) -> bool:
        return self.profile is not None


def _fuzzy_order(keys: Tuple[str, ...]) -> List[str]:
    # Longest key first so the most specific entry wins; ties alphabetical.
    return sorted(keys, key=lambda k: (-len(k), k.casefold(), k))


class ActivityResolver:
    """Exact, then case-insensitive containment matching against curated profiles."""

    def __init__(self, knowledge_base: ActivityKnowledgeBase) -> None:
        self.knowledge_base = knowledge_base
        self._ordered_keys = _fuzzy_order(knowledge_base.keys())

    def resolve(self, requested: str) -> Resolution:
        text = requested or ""
        if not text.strip():
            return Resolution(requested=text)

        profile = self.knowledge_base.lookup(text)
        if profile is not None:
            return Resolution(requested=text, profile=profile.rebound(text), matched_key=text, match_type=MATCH_EXACT)

        key = self.fuzzy_key(text)
        if key is not None:
            profile = self.knowledge_base.lookup(key)
            if profile is not None:
                print(f"[resolver] '{text}' matched curated profile '{key}'")
                return Resolution(requested=text, profile=profile.rebound(text), matched_key=key, match_type=MATCH_FUZZY)

        return Resolution(requested=text)

    def fuzzy_key(self, requested: str) -> Optional[str]:
        needle = requested.strip().casefold()
        if not needle:
            return None
        for key in self._ordered_keys:
            folded = key.casefold()
            if folded in needle or needle in folded:
                return key
        return None


__all__ = ["ActivityResolver", "Resolution", "MATCH_EXACT", "MATCH_FUZZY", "UNRESOLVED"]
