"""Client seam for the external risk-profile generation service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

from pydantic_ai import Agent
from pydantic_ai.exceptions import AgentRunError, ModelHTTPError, UserError

from swms_risk.config import DEFAULT_GENERATION_MODEL, DEFAULT_TEMPERATURE

SYSTEM_PROMPT = (
    "You are an expert Australian construction safety professional with deep knowledge of WHS "
    "legislation, Australian Standards, and trade-specific safety requirements. Generate accurate, "
    "detailed, and legally compliant risk assessments."
)

_RESPONSE_SCHEMA = """{
  "hazards": ["specific hazard 1", "specific hazard 2", ...],
  "initialRiskScore": number (1-20),
  "controlMeasures": ["specific control 1", "specific control 2", ...],
  "legislation": ["Work Health and Safety Act 2011", "specific standard", ...],
  "residualRiskScore": number (1-20),
  "responsible": "specific role",
  "ppe": ["specific ppe item 1", ...],
  "trainingRequired": ["specific training 1", ...],
  "permitRequired": ["permit type if needed"],
  "inspectionFrequency": "specific frequency",
  "emergencyProcedures": ["specific emergency step 1", ...],
  "environmentalControls": ["specific environmental control 1", ...]
}"""


class AugmentationFailure(Exception):
    """Transport, timeout or malformed-response failure from the generation service."""


@dataclass(frozen=True, slots=True)
class GenerationRequest:
    activity: str
    trade_type: str
    project_context: Optional[str] = None

    def as_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"activity": self.activity, "tradeType": self.trade_type}
        if self.project_context:
            payload["projectContext"] = self.project_context
        return payload


class GenerationClient(Protocol):
    """Anything that can turn a GenerationRequest into a raw (untrusted) response.

    The response may be a decoded JSON object or the model's raw text.
    """

    async def generate(self, request: GenerationRequest) -> Any:
        ...


def build_prompt(request: GenerationRequest) -> str:
    context = request.project_context or "General construction project in Australia"
    return (
        f'Generate a comprehensive, unique risk assessment for the specific construction activity: '
        f'"{request.activity}" in the {request.trade_type} trade.\n\n'
        f"PROJECT CONTEXT: {context}\n\n"
        "Requirements:\n"
        "1. Identify specific hazards unique to this exact activity\n"
        "2. Calculate initial risk score (1-20 scale: Consequence x Likelihood)\n"
        "3. Provide detailed control measures following hierarchy of controls\n"
        "4. List all applicable Australian legislation and standards\n"
        "5. Calculate residual risk score after controls\n"
        "6. Include specific PPE requirements\n"
        "7. Specify training requirements\n"
        "8. List any permits required\n"
        "9. Define inspection frequency\n"
        "10. Emergency procedures specific to this activity\n"
        "11. Environmental controls\n\n"
        "Respond with a single JSON object and nothing else, using this structure:\n"
        f"{_RESPONSE_SCHEMA}\n\n"
        f'Make this assessment highly specific to "{request.activity}" - not generic. '
        "Reference real Australian construction standards and legislation."
    )


class PydanticAIGenerationClient:
    """GenerationClient backed by a pydantic-ai Agent returning JSON text."""

    def __init__(
        self,
        model: str = DEFAULT_GENERATION_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        agent: Optional[Agent] = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self._agent = agent

    def _get_agent(self) -> Agent:
        # Built lazily: model construction fails without credentials
        if self._agent is None:
            self._agent = Agent(
                self.model,
                system_prompt=SYSTEM_PROMPT,
                model_settings={"temperature": self.temperature},
            )
        return self._agent

    async def generate(self, request: GenerationRequest) -> Any:
        try:
            agent = self._get_agent()
            result = await agent.run(build_prompt(request))
        except ModelHTTPError as exc:
            raise AugmentationFailure(f"generation service returned HTTP {exc.status_code}") from exc
        except (AgentRunError, UserError) as exc:
            raise AugmentationFailure(f"generation service error: {exc}") from exc
        return result.output


__all__ = [
    "AugmentationFailure",
    "GenerationClient",
    "GenerationRequest",
    "PydanticAIGenerationClient",
    "SYSTEM_PROMPT",
    "build_prompt",
]
