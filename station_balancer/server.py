"""
FastAPI HTTP server for the station balancer.

Exposes:
- POST /api/balance - Suggest test moves that balance station load
- POST /api/stations/apply - Write suggested assignments back onto stations
- GET /api/sample - Sample session for trying the balancer
- GET /health - Health check
"""

import logging
import sys
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .adjustments import apply_suggested_assignments, has_exceeded_max_time, moved_tests_map
from .balancer import balance
from .config import get_cors_origins
from .models import (
    ApplyRequest,
    BalanceRequest,
    BalanceResponse,
    SessionData,
    Station,
)
from .report import summarize_result
from .world import build_sample_session

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    stream=sys.stdout,
    force=True
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Station Balancer API",
    description="REST API for balancing test assignments across research stations",
    version="1.0.0",
)

allow_origins = get_cors_origins()
logger.info("CORS allow_origins = %r", allow_origins)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.post("/api/balance")
def balance_endpoint(req: BalanceRequest) -> dict:
    """
    Suggest single-test moves for the given stations and test catalog.

    Args:
        req: Stations, tests, optional max_time and max_iterations

    Returns:
        BalanceResponse with the result, summary lines, whether the cap is
        still exceeded, and the moved-tests map

    Raises:
        HTTPException(400): If station or test IDs are not unique
    """
    logger.info(
        "POST /api/balance stations=%d tests=%d max_time=%s max_iterations=%d",
        len(req.stations),
        len(req.tests),
        req.max_time,
        req.max_iterations,
    )

    session = SessionData(stations=req.stations, tests=req.tests)
    try:
        session.validate_unique_ids()
    except ValueError as exc:
        logger.warning("rejecting balance request: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    result = balance(req.stations, req.tests, req.max_time, req.max_iterations)

    response = BalanceResponse(
        result=result,
        summary=summarize_result(result, req.stations, req.max_time),
        cap_exceeded=has_exceeded_max_time(result, req.max_time),
        moved_tests=moved_tests_map(result.suggestions),
    )

    logger.info(
        "balance endpoint returning %d suggestions (max %d -> %d)",
        len(result.suggestions),
        result.original_max_time,
        result.adjusted_max_time,
    )

    return response.model_dump(mode="json")


@app.post("/api/stations/apply")
def apply_endpoint(req: ApplyRequest) -> list[Station]:
    """Return the stations with suggested assignments applied and test counts updated."""
    logger.info(
        "POST /api/stations/apply stations=%d assignments=%d",
        len(req.stations),
        len(req.suggested_assignments),
    )
    return apply_suggested_assignments(req.stations, req.suggested_assignments)


@app.get("/api/sample")
def sample_endpoint() -> dict:
    """Return the sample session."""
    return build_sample_session().model_dump(mode="json")


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "ok"}
