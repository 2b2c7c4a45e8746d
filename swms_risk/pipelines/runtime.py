from __future__ import annotations

"""Utility helpers for constructing engine instances."""

import datetime as _dt
import uuid
from dataclasses import dataclass
from typing import Callable, Optional

from swms_risk.config import EngineConfig, load_engine_config, log_active_config
from swms_risk.generators.augment import GenerativeAugmenter
from swms_risk.generators.fallback import DeterministicFallbackGenerator
from swms_risk.generators.generation_client import GenerationClient, PydanticAIGenerationClient
from swms_risk.generators.resolver import ActivityResolver
from swms_risk.generators.synthesizer import AssessmentSynthesizer
from swms_risk.knowledge.repository import KnowledgeRepository, load_default_repository

from .batch import BatchOrchestrator
from .pacing import MinIntervalPacer


def generate_run_id(prefix: str = "swms") -> str:
    timestamp = _dt.datetime.now(_dt.timezone.utc).strftime("%Y%m%dT%H%M%S")
    short_uuid = uuid.uuid4().hex[:8]
    return f"{prefix}-{timestamp}-{short_uuid}"


@dataclass(slots=True)
class Engine:
    run_id: str
    config: EngineConfig
    repository: KnowledgeRepository
    synthesizer: AssessmentSynthesizer
    orchestrator: BatchOrchestrator


def build_engine(
    config: Optional[EngineConfig] = None,
    client: Optional[GenerationClient] = None,
    repository: Optional[KnowledgeRepository] = None,
    pacer: Optional[MinIntervalPacer] = None,
    clock: Optional[Callable[[], float]] = None,
    run_id: Optional[str] = None,
) -> Engine:
    """Wire knowledge, generators and the batch orchestrator from config.

    A supplied ``client`` replaces the pydantic-ai client; the generation service
    is only contacted when ``config.augmentation_enabled`` is true.
    """

    cfg = config or load_engine_config()
    repo = repository or load_default_repository(cfg.knowledge_dir)
    log_active_config("[config]", cfg)

    augmenter: Optional[GenerativeAugmenter] = None
    if cfg.augmentation_enabled:
        gen_client = client or PydanticAIGenerationClient(model=cfg.generation_model, temperature=cfg.temperature)
        augmenter = GenerativeAugmenter(gen_client, timeout_seconds=cfg.generation_timeout_seconds)

    synthesizer = AssessmentSynthesizer(
        resolver=ActivityResolver(repo.activities),
        fallback=DeterministicFallbackGenerator(repo.trades),
        augmenter=augmenter,
        augmentation_enabled=cfg.augmentation_enabled,
    )
    orchestrator_kwargs = {}
    if clock is not None:
        orchestrator_kwargs["clock"] = clock
    orchestrator = BatchOrchestrator(
        synthesizer,
        pacer=pacer or MinIntervalPacer(cfg.min_call_interval_seconds),
        codes=repo.codes,
        deadline_seconds=cfg.batch_deadline_seconds,
        **orchestrator_kwargs,
    )
    return Engine(
        run_id=run_id or generate_run_id(),
        config=cfg,
        repository=repo,
        synthesizer=synthesizer,
        orchestrator=orchestrator,
    )


__all__ = ["Engine", "build_engine", "generate_run_id"]
