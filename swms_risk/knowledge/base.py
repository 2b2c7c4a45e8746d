"""Curated activity risk profiles keyed by canonical activity name."""

from __future__ import annotations

import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple, Union

from pydantic import ValidationError

from swms_risk.models.risk import RiskProfile


class KnowledgeBaseLoadError(RuntimeError):
    """Bundled or configured knowledge data is missing or malformed."""


def read_json_document(path: Union[str, Path]) -> Dict[str, Any]:
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise KnowledgeBaseLoadError(f"Knowledge file not found: {p}") from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise KnowledgeBaseLoadError(f"Unable to read knowledge file {p}: {exc}") from exc
    if not isinstance(data, dict):
        raise KnowledgeBaseLoadError(f"Knowledge file {p} must contain a JSON object")
    return data


class ActivityKnowledgeBase:
    """Read-only lookup of curated RiskProfiles.

    Keys are case-sensitive canonical activity names. Lookups hand out deep
    copies so no caller can alter the shared table.
    """

    def __init__(self, profiles: Iterable[RiskProfile]) -> None:
        entries: Dict[str, RiskProfile] = {}
        for profile in profiles:
            if profile.activity_name in entries:
                raise KnowledgeBaseLoadError(f"Duplicate activity key: {profile.activity_name!r}")
            entries[profile.activity_name] = profile
        self._entries = MappingProxyType(entries)

    def lookup(self, name: str) -> Optional[RiskProfile]:
        profile = self._entries.get(name)
        if profile is None:
            return None
        return profile.model_copy(deep=True)

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._entries.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ActivityKnowledgeBase":
        doc = read_json_document(path)
        raw = doc.get("activities")
        if not isinstance(raw, list):
            raise KnowledgeBaseLoadError(f"{path}: 'activities' must be a list")
        profiles = []
        for idx, item in enumerate(raw):
            try:
                profiles.append(RiskProfile.model_validate(item))
            except ValidationError as exc:
                raise KnowledgeBaseLoadError(f"{path}: activity #{idx} is invalid: {exc}") from exc
        return cls(profiles)


__all__ = ["ActivityKnowledgeBase", "KnowledgeBaseLoadError", "read_json_document"]
