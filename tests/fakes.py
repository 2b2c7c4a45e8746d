from __future__ import annotations

import asyncio
from typing import Any, Dict, List

from swms_risk.generators.generation_client import GenerationRequest


def valid_payload(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "hazards": ["Entanglement in loom mechanisms", "Drowning"],
        "initialRiskScore": 14,
        "controlMeasures": ["Dive buddy system", "Guarding on moving parts"],
        "legislation": ["Work Health and Safety Act 2011", "AS/NZS 2299.1:2015"],
        "residualRiskScore": 5,
        "responsible": "Dive Supervisor",
        "ppe": ["Wetsuit", "Cut-resistant gloves"],
        "trainingRequired": ["Occupational diver certification"],
        "permitRequired": ["Dive plan approval"],
        "inspectionFrequency": "Before each dive",
        "emergencyProcedures": ["Surface immediately", "Call emergency services: 000"],
        "environmentalControls": ["Contain fibre offcuts"],
    }
    payload.update(overrides)
    return payload


class FakeClient:
    """Scripted generation client keyed by activity text.

    Values may be a response, an exception instance to raise, or missing (a
    valid payload is returned).
    """

    def __init__(self, responses: Dict[str, Any] | None = None, delay: float = 0.0) -> None:
        self.responses = dict(responses or {})
        self.delay = delay
        self.calls: List[GenerationRequest] = []

    async def generate(self, request: GenerationRequest) -> Any:
        self.calls.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        value = self.responses.get(request.activity, valid_payload())
        if isinstance(value, BaseException):
            raise value
        return value


class FakeClock:
    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


