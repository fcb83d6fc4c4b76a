"""FastAPI REST backend for the fare-compare estimator."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, field_validator

from fare_compare.config import settings
from fare_compare.core.engine import EstimationPipeline, build_pipeline
from fare_compare.core.models import Suggestion
from fare_compare.errors import InternalRecoveryFailure, InvalidLocation

log = logging.getLogger(__name__)

app = FastAPI(title="Fare Compare", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Module-level pipeline singleton (gazetteer and HTTP sessions are shared)
# ---------------------------------------------------------------------------
_pipeline: Optional[EstimationPipeline] = None


def get_pipeline() -> EstimationPipeline:
    global _pipeline
    if _pipeline is None:
        _pipeline = build_pipeline(settings.geocoder, settings.router, cfg=settings)
    return _pipeline


def set_pipeline(pipeline: Optional[EstimationPipeline]) -> None:
    """Swap the pipeline (tests, embedding)."""
    global _pipeline
    _pipeline = pipeline


# ---------------------------------------------------------------------------
# Request / Response models
# ---------------------------------------------------------------------------

class CalculateRequest(BaseModel):
    pickup: str = ""
    drop: str = ""

    @field_validator("pickup", "drop", mode="before")
    @classmethod
    def _non_string_is_blank(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""


class SuggestResponse(BaseModel):
    suggestions: List[Suggestion] = []


# ---------------------------------------------------------------------------
# Error mapping — user-facing failures are client errors, never 5xx
# ---------------------------------------------------------------------------

@app.exception_handler(InvalidLocation)
async def _invalid_location(request: Request, exc: InvalidLocation):
    return JSONResponse(status_code=400, content={"error": exc.message})


@app.exception_handler(InternalRecoveryFailure)
async def _recovery_failed(request: Request, exc: InternalRecoveryFailure):
    return JSONResponse(status_code=400, content={"error": exc.message})


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get("/health")
def health():
    p = get_pipeline()
    return {
        "status": "ok",
        "geocoder": getattr(p.geo.geocoder, "name", None),
        "router": getattr(p.routes.router, "name", None),
    }


@app.get("/suggest", response_model=SuggestResponse)
def suggest(q: str = ""):
    suggestions = get_pipeline().suggest(
        q, limit=settings.suggest_limit, min_chars=settings.suggest_min_chars
    )
    return SuggestResponse(suggestions=suggestions)


@app.post("/calculate")
def calculate(req: CalculateRequest) -> Dict[str, Any]:
    # Sync handler: FastAPI runs it in the threadpool, so the geocoder
    # spacing sleep blocks only this request.
    result = get_pipeline().estimate(req.pickup, req.drop)
    return result.to_response()
