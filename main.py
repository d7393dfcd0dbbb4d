"""FastAPI Backend - itinerary generation endpoint"""
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Any, Optional

# Load .env before anything else
from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config import Settings
from ItineraryRequest import ItineraryRequest, RequestValidationError
from Itinerary import PlanResult, SourceTag
from agents import planning_agent
from agents.AttractionAgent import fetch_local_attractions

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

settings = Settings.from_env()
orchestrator = planning_agent.build_orchestrator(settings)

# Planning calls run here so the caller-side timeout can be enforced
_plan_pool = ThreadPoolExecutor(max_workers=int(os.getenv("PLAN_WORKERS", "8")))

app = FastAPI(
    title="Wanderplan Itinerary API",
    description="Day-by-day itinerary generation with provider fallback",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Pydantic models
class ItineraryBody(BaseModel):
    destination: Optional[str] = None
    startDate: Optional[str] = None
    duration: Optional[Any] = None
    preferences: Optional[Any] = None


def plan_with_timeout(request: ItineraryRequest, timeout: float) -> PlanResult:
    """Run the orchestrator, falling back to the mock generator on expiry.

    The running attempt is not cancelled; its result is simply discarded.
    """
    future = _plan_pool.submit(orchestrator.plan, request)
    try:
        return future.result(timeout=timeout)
    except FutureTimeout:
        logger.warning("Planning for %s exceeded %.0fs, using mock itinerary",
                       request.destination, timeout)
        itinerary = orchestrator.fallback_itinerary(request)
        return PlanResult(itinerary, SourceTag.MOCK, [("orchestrator", "Timeout")])


@app.post("/generate-itinerary")
def generate_itinerary(body: ItineraryBody):
    try:
        request = ItineraryRequest.from_payload(body.model_dump())
    except RequestValidationError as exc:
        return JSONResponse(status_code=400, content={"error": str(exc)})

    logger.info("Generating itinerary for: %s", request.destination)
    result = plan_with_timeout(request, settings.plan_timeout_seconds)
    logger.info("Itinerary for %s from %s (%d days)",
                request.destination, result.source.value, len(result.itinerary.days))
    return result.to_dict()


@app.get("/local-attractions")
def local_attractions(
    destination: str = Query("", description="Destination city"),
    category: str = Query("attractions", description="Foursquare search term"),
):
    if not destination.strip():
        return JSONResponse(status_code=400, content={"error": "Missing required 'destination' parameter"})
    attractions, source = fetch_local_attractions(
        destination, api_key=settings.foursquare_api_key, category=category,
    )
    return {
        "destination": destination,
        "category": category,
        "attractions": attractions,
        "count": len(attractions),
        "source": source,
    }


@app.get("/health")
def health():
    return {
        "status": "ok",
        "version": "1.0.0",
        "provider_order": list(settings.provider_order),
        "providers": {
            p.provider_name: p.configured for p in orchestrator.providers
        },
        "enrichment": orchestrator.enricher is not None,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
