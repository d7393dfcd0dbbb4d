"""
Text-generation adapter base (litellm).

One ``generate()`` call = one completion round-trip. No retries here; the
orchestrator decides what happens after a failure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import litellm

try:
    from .errors import (
        ProviderEmptyResponse,
        ProviderHTTPError,
        ProviderTimeout,
        ProviderUnavailable,
    )
except ImportError:
    from errors import (  # type: ignore
        ProviderEmptyResponse,
        ProviderHTTPError,
        ProviderTimeout,
        ProviderUnavailable,
    )

from Itinerary import SourceTag
from ItineraryRequest import ItineraryRequest

logger = logging.getLogger(__name__)

# Silence litellm's own verbose logging
litellm.suppress_debug_info = True
# Drop params unsupported by the active model (e.g. response_format on free models)
litellm.drop_params = True

# Some reasoning models leave message.content empty and put the answer here
_ALT_TEXT_FIELDS = ("reasoning_content", "reasoning")


@dataclass(frozen=True)
class PromptSpec:
    destination: str
    start_date: str  # YYYY-MM-DD
    duration: int
    preference_descriptions: list[str] = field(default_factory=list)
    attractions: list[str] = field(default_factory=list)

    @property
    def interests(self) -> str:
        return ", ".join(self.preference_descriptions) or "a variety of activities"


def build_prompt_spec(request: ItineraryRequest, attractions: Optional[list[str]] = None) -> PromptSpec:
    return PromptSpec(
        destination=request.destination,
        start_date=request.start_date.isoformat(),
        duration=request.duration,
        preference_descriptions=request.preference_descriptions(),
        attractions=list(attractions or [])[:10],
    )


def _first_text(message: Any) -> str:
    content = getattr(message, "content", None)
    if isinstance(content, str) and content.strip():
        return content
    for name in _ALT_TEXT_FIELDS:
        alt = getattr(message, name, None)
        if isinstance(alt, str) and alt.strip():
            logger.info("Empty message content, using '%s' field instead", name)
            return alt
    return ""


class TextGenerationClient:
    """Wraps a single remote completion call.

    Subclasses supply the model string, the credential and the message
    layout; this class owns the call itself and the error mapping.
    """

    source_tag: SourceTag
    provider_name = "provider"
    temperature = 0.7
    max_tokens = 2048

    def __init__(self, api_key: str, model: str, timeout: float = 60.0):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def litellm_model(self) -> str:
        return self.model

    def build_messages(self, spec: PromptSpec) -> list[dict]:
        raise NotImplementedError

    def completion_kwargs(self) -> dict:
        return {}

    def generate(self, spec: PromptSpec) -> str:
        """Return the raw model text for *spec*."""
        if not self.configured:
            raise ProviderUnavailable(f"no API key configured for {self.provider_name}")

        logger.info("Calling %s (%s) for %s, %d days",
                    self.provider_name, self.model, spec.destination, spec.duration)
        try:
            response = litellm.completion(
                model=self.litellm_model(),
                messages=self.build_messages(spec),
                api_key=self.api_key,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                timeout=self.timeout,
                **self.completion_kwargs(),
            )
        except litellm.Timeout as exc:
            raise ProviderTimeout(f"{self.provider_name} timed out: {exc}") from exc
        except Exception as exc:
            status = getattr(exc, "status_code", None)
            rate_limited = isinstance(exc, litellm.RateLimitError) or status == 429
            raise ProviderHTTPError(
                f"{self.provider_name} request failed: {exc}",
                status_code=status if isinstance(status, int) else None,
                rate_limited=rate_limited,
            ) from exc

        choices = getattr(response, "choices", None) or []
        if not choices:
            raise ProviderEmptyResponse(f"{self.provider_name} returned no choices")
        text = _first_text(getattr(choices[0], "message", None))
        if not text:
            raise ProviderEmptyResponse(f"{self.provider_name} returned no usable text")

        logger.debug("%s raw output: %s", self.provider_name, text[:500])
        return text
