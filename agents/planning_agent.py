"""
Itinerary planner - provider fallback chain

Tries each configured text-generation provider in order and falls back to
the offline mock generator, so a validated request always yields an
itinerary:

  TRY_PRIMARY  → generate → extract → normalize (→ enrich) → DONE
       │ any named failure
       ▼
  TRY_SECONDARY → same pipeline → DONE
       │ any named failure
       ▼
  USE_MOCK → MockItineraryGenerator (no I/O, cannot fail) → DONE

No state is visited twice. Each provider attempt is turned into an
``Attempt`` value (itinerary or named error) and the transition is chosen
from that value; only this module attaches the source tag.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence

try:
    from .AttractionAgent import attraction_names
    from .EnrichAgent import ActivityEnricher
    from .OpenAIAgent import OpenAIClient
    from .OpenRouterAgent import OpenRouterClient
    from .errors import GenerationError, InvalidSchema
    from .llm_client import PromptSpec, TextGenerationClient, build_prompt_spec
    from .normalizer import normalize
    from .response_parser import extract_json
except ImportError:
    from AttractionAgent import attraction_names  # type: ignore
    from EnrichAgent import ActivityEnricher  # type: ignore
    from OpenAIAgent import OpenAIClient  # type: ignore
    from OpenRouterAgent import OpenRouterClient  # type: ignore
    from errors import GenerationError, InvalidSchema  # type: ignore
    from llm_client import PromptSpec, TextGenerationClient, build_prompt_spec  # type: ignore
    from normalizer import normalize  # type: ignore
    from response_parser import extract_json  # type: ignore

from config import Settings
from Itinerary import Itinerary, PlanResult, SourceTag
from ItineraryRequest import ItineraryRequest
from mock_data import MockItineraryGenerator

logger = logging.getLogger(__name__)


class PlannerState(Enum):
    TRY_PRIMARY = "TryPrimary"
    TRY_SECONDARY = "TrySecondary"
    USE_MOCK = "UseMock"
    DONE = "Done"


_PROVIDER_STATES = (PlannerState.TRY_PRIMARY, PlannerState.TRY_SECONDARY)


@dataclass
class Attempt:
    source: SourceTag
    itinerary: Optional[Itinerary] = None
    error: Optional[GenerationError] = None

    @property
    def ok(self) -> bool:
        return self.itinerary is not None


class ItineraryOrchestrator:
    """Runs the provider fallback chain for one request at a time.

    Holds only immutable collaborators, so one instance can serve
    concurrent requests. Random content (mock picks, enrichment choices)
    comes from a fresh ``random.Random`` built per request by ``rng_factory``.
    """

    def __init__(
        self,
        providers: Sequence[TextGenerationClient],
        mock_generator: Optional[MockItineraryGenerator] = None,
        enricher: Optional[ActivityEnricher] = None,
        grounding: Optional[Callable[[str], list[str]]] = None,
        rng_factory: Optional[Callable[[ItineraryRequest], random.Random]] = None,
    ):
        self.providers = list(providers)[: len(_PROVIDER_STATES)]
        self.mock_generator = mock_generator or MockItineraryGenerator()
        self.enricher = enricher
        self.grounding = grounding
        self.rng_factory = rng_factory

    # -- pipeline ----------------------------------------------------------

    def _rng_for(self, request: ItineraryRequest) -> Optional[random.Random]:
        return self.rng_factory(request) if self.rng_factory else None

    def _prompt_for(self, request: ItineraryRequest) -> PromptSpec:
        attractions: list[str] = []
        if self.grounding is not None:
            try:
                attractions = self.grounding(request.destination)
            except Exception as exc:
                logger.warning("Attraction grounding failed for %s: %s", request.destination, exc)
        return build_prompt_spec(request, attractions)

    def _enrich(self, itinerary: Itinerary, rng: Optional[random.Random]) -> Itinerary:
        if self.enricher is None:
            return itinerary
        try:
            return self.enricher.enrich_itinerary(itinerary, rng=rng)
        except Exception:
            logger.exception("Enrichment failed for %s, returning unenriched itinerary",
                             itinerary.destination)
            return itinerary

    def attempt(self, provider: TextGenerationClient, spec: PromptSpec,
                request: ItineraryRequest, rng: Optional[random.Random] = None) -> Attempt:
        """generate → extract → normalize (→ enrich) for a single provider."""
        source = provider.source_tag
        try:
            raw = provider.generate(spec)
            parsed = extract_json(raw)
            itinerary = normalize(parsed, request, source=source)
        except GenerationError as exc:
            return Attempt(source=source, error=exc)
        except Exception as exc:
            logger.exception("Unexpected failure handling %s output", provider.provider_name)
            return Attempt(source=source, error=InvalidSchema(f"unexpected {type(exc).__name__}: {exc}"))

        return Attempt(source=source, itinerary=self._enrich(itinerary, rng))

    def fallback_itinerary(self, request: ItineraryRequest,
                           rng: Optional[random.Random] = None) -> Itinerary:
        """Offline itinerary; also used by callers whose own timeout expired."""
        return self.mock_generator.generate(request, rng=rng or self._rng_for(request))

    # -- state machine -----------------------------------------------------

    def plan(self, request: ItineraryRequest) -> PlanResult:
        failures: list[tuple[str, str]] = []
        spec: Optional[PromptSpec] = None
        rng = self._rng_for(request)
        state = PlannerState.TRY_PRIMARY
        result: Optional[PlanResult] = None

        while state is not PlannerState.DONE:
            if state in _PROVIDER_STATES:
                slot = _PROVIDER_STATES.index(state)
                next_state = (_PROVIDER_STATES[slot + 1]
                              if slot + 1 < len(_PROVIDER_STATES) else PlannerState.USE_MOCK)
                if slot >= len(self.providers):
                    state = next_state
                    continue

                provider = self.providers[slot]
                if spec is None:
                    spec = self._prompt_for(request)
                outcome = self.attempt(provider, spec, request, rng)
                if outcome.ok:
                    logger.info("%s: %s produced the itinerary", state.value, provider.provider_name)
                    result = PlanResult(outcome.itinerary, outcome.source, failures)
                    state = PlannerState.DONE
                else:
                    err = outcome.error
                    failures.append((outcome.source.value, err.kind))
                    logger.warning("%s: %s failed with %s: %s",
                                   state.value, provider.provider_name, err.kind, err)
                    state = next_state

            elif state is PlannerState.USE_MOCK:
                logger.info("All providers failed (%s), using mock itinerary",
                            ", ".join(f"{s}={k}" for s, k in failures) or "none configured")
                result = PlanResult(self.fallback_itinerary(request, rng), SourceTag.MOCK, failures)
                state = PlannerState.DONE

        return result


def request_rng_factory(seed: Optional[int]) -> Callable[[ItineraryRequest], random.Random]:
    """Per-request generators; with a seed, the same request always gets the same stream."""
    if seed is None:
        return lambda request: random.Random()
    return lambda request: random.Random(f"{seed}:{request!r}")


def build_orchestrator(settings: Settings) -> ItineraryOrchestrator:
    """Wire providers, mock generator and enricher from settings."""
    clients = {
        "openrouter": OpenRouterClient(
            settings.openrouter_api_key, settings.openrouter_model, settings.provider_timeout_seconds),
        "openai": OpenAIClient(
            settings.openai_api_key, settings.openai_model, settings.provider_timeout_seconds),
    }
    providers = [clients[name] for name in settings.provider_order]

    enricher = None
    if settings.enable_enrichment:
        enricher = ActivityEnricher(
            unsplash_access_key=settings.unsplash_access_key,
            max_workers=settings.enrich_max_workers,
        )

    def grounding(destination: str) -> list[str]:
        return attraction_names(destination, api_key=settings.foursquare_api_key)

    return ItineraryOrchestrator(
        providers=providers,
        mock_generator=MockItineraryGenerator(),
        enricher=enricher,
        grounding=grounding,
        rng_factory=request_rng_factory(settings.random_seed),
    )
