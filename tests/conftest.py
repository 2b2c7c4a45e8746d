from __future__ import annotations

import pytest

from swms_risk.generators.fallback import DeterministicFallbackGenerator
from swms_risk.generators.resolver import ActivityResolver
from swms_risk.knowledge import load_default_repository


@pytest.fixture
def repository():
    return load_default_repository()


@pytest.fixture
def resolver(repository):
    return ActivityResolver(repository.activities)


@pytest.fixture
def fallback(repository):
    return DeterministicFallbackGenerator(repository.trades)
