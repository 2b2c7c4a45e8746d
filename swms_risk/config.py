"""Centralized configuration loader.

Loads engine settings (generation service, pacing, batch deadline, knowledge
data location) from the environment. Other modules should import from here
instead of reading os.environ directly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_GENERATION_MODEL = "openai:gpt-4o"
DEFAULT_GENERATION_TIMEOUT = 30.0
DEFAULT_MIN_CALL_INTERVAL = 0.5
DEFAULT_TEMPERATURE = 0.7


def _load_env_once() -> None:
    """Idempotently load .env so downstream imports see variables."""
    # Repo-local .env never overrides variables already set by the process
    load_dotenv(override=False)


_load_env_once()


@dataclass(frozen=True)
class EngineConfig:
    augmentation_enabled: bool = False
    generation_model: str = DEFAULT_GENERATION_MODEL
    generation_timeout_seconds: float = DEFAULT_GENERATION_TIMEOUT
    min_call_interval_seconds: float = DEFAULT_MIN_CALL_INTERVAL
    temperature: float = DEFAULT_TEMPERATURE
    batch_deadline_seconds: Optional[float] = None
    knowledge_dir: Optional[str] = None


def _get(key: str, default: Optional[str] = None) -> Optional[str]:
    val = os.getenv(key, default if default is not None else None)
    if val is None:
        return None
    s = str(val).strip()
    return s if s else (default if default is not None else "")


def _get_bool(key: str, default: bool) -> bool:
    raw = _get(key, None)
    if not raw:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _get_float(key: str, default: Optional[float], minimum: float = 0.0) -> Optional[float]:
    raw = _get(key, None)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        print(f"[config] ignoring non-numeric {key}={raw!r}")
        return default
    if value < minimum:
        print(f"[config] ignoring out-of-range {key}={raw!r}")
        return default
    return value


def has_generation_credentials() -> bool:
    return bool(_get("OPENAI_API_KEY", ""))


def load_engine_config() -> EngineConfig:
    """Build EngineConfig from the environment.

    Augmentation defaults to on only when an OpenAI key is present; an explicit
    SWMS_AUGMENTATION_ENABLED always wins.
    """
    return EngineConfig(
        augmentation_enabled=_get_bool("SWMS_AUGMENTATION_ENABLED", has_generation_credentials()),
        generation_model=_get("SWMS_GENERATION_MODEL", DEFAULT_GENERATION_MODEL) or DEFAULT_GENERATION_MODEL,
        generation_timeout_seconds=_get_float("SWMS_GENERATION_TIMEOUT", DEFAULT_GENERATION_TIMEOUT, minimum=0.1)
        or DEFAULT_GENERATION_TIMEOUT,
        min_call_interval_seconds=_get_float("SWMS_MIN_CALL_INTERVAL", DEFAULT_MIN_CALL_INTERVAL) or 0.0,
        temperature=_get_float("SWMS_GENERATION_TEMPERATURE", DEFAULT_TEMPERATURE) or 0.0,
        batch_deadline_seconds=_get_float("SWMS_BATCH_DEADLINE", None, minimum=0.1),
        knowledge_dir=_get("SWMS_KNOWLEDGE_DIR", None) or None,
    )


def log_active_config(prefix: str = "[config]", config: Optional[EngineConfig] = None) -> None:
    """Print a concise summary of active engine settings (never the API key)."""
    cfg = config or load_engine_config()
    deadline = f"{cfg.batch_deadline_seconds:g}s" if cfg.batch_deadline_seconds else "none"
    print(
        f"{prefix} augmentation={'on' if cfg.augmentation_enabled else 'off'} model='{cfg.generation_model}' "
        f"timeout={cfg.generation_timeout_seconds:g}s min_interval={cfg.min_call_interval_seconds:g}s "
        f"deadline={deadline} knowledge_dir='{cfg.knowledge_dir or 'bundled'}' "
        f"credentials={'set' if has_generation_credentials() else 'missing'}"
    )


__all__ = [
    "DEFAULT_GENERATION_MODEL",
    "DEFAULT_GENERATION_TIMEOUT",
    "DEFAULT_MIN_CALL_INTERVAL",
    "EngineConfig",
    "has_generation_credentials",
    "load_engine_config",
    "log_active_config",
]
