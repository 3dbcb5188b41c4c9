"""
Bet Notation Engine — FastAPI Server
====================================

HTTP surface over the three engine operations, for keypad front-ends.

Endpoints:
    POST /prefix            Is this a valid in-progress typing state?
    POST /validate          Is this a complete, accepted notation?
    POST /process           Expand and price a notation
    GET  /health            Health check / readiness probe

Run:
    uvicorn api:app --reload              # Dev (http://localhost:8000)
    uvicorn api:app --host 0.0.0.0        # Production

Docs:
    http://localhost:8000/docs             # Swagger UI (auto-generated)
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from bet_notation import __version__
from bet_notation.config import load_config
from bet_notation.grammar import classify
from bet_notation.models import BetResult, Channel, NotationShape
from bet_notation.processor import BetProcessor
from bet_notation.validators import accepts, is_valid_prefix

# ─── Load .env if available ──────────────────────────────────────────
try:
    from dotenv import load_dotenv

    load_dotenv()
except ImportError:
    pass

logger = logging.getLogger(__name__)


# ─── Application Lifespan (build processor) ─────────────────────────

_processor: BetProcessor | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Read BET_NOTATION_* settings once on startup."""
    global _processor  # noqa: PLW0603
    _processor = BetProcessor(load_config())
    logger.info("Processor ready: %s", _processor.config)
    yield
    _processor = None


# ─── FastAPI App ─────────────────────────────────────────────────────

app = FastAPI(
    title="Bet Notation Engine API",
    description=(
        "Validates compact betting notation as it is typed, and expands a "
        "submitted notation into its 2D/3D number combinations with a total stake."
    ),
    version=__version__,
    lifespan=lifespan,
)


# ─── Request / Response Schemas ─────────────────────────────────────


class NotationRequest(BaseModel):
    """Request body for /prefix and /validate."""

    text: str = Field(..., max_length=64, json_schema_extra={"example": "12X34"})


class PrefixResponse(BaseModel):
    text: str
    valid: bool


class ValidateResponse(BaseModel):
    text: str
    accepted: bool
    shape: NotationShape


class ProcessRequest(BaseModel):
    """Request body for the /process endpoint."""

    text: str = Field(..., max_length=64)
    channels: list[Channel]
    amount: float
    currency: Optional[str] = None

    model_config = {"json_schema_extra": {"example": {
        "text": "12X34",
        "channels": [
            {"id": "A", "label": "A", "multipliers": {"2D": 2, "3D": 3}},
            {"id": "B", "label": "B", "multipliers": {"2D": 1.5, "3D": 2.5}},
        ],
        "amount": 10,
        "currency": "USD",
    }}}


class HealthResponse(BaseModel):
    status: str
    version: str
    max_digit_frequency: int
    allow_simple_range: bool


# ─── Helpers ─────────────────────────────────────────────────────────


def _get_processor() -> BetProcessor:
    if _processor is None:
        raise HTTPException(status_code=503, detail="Processor not initialised")
    return _processor


# ─── Endpoints ───────────────────────────────────────────────────────


@app.post(
    "/prefix",
    summary="Check an in-progress notation",
    tags=["Validation"],
    responses={503: {"description": "Processor not yet initialised"}},
)
def check_prefix(request: NotationRequest) -> PrefixResponse:
    """Called on every keystroke; `valid` is false once no completion is possible."""
    processor = _get_processor()
    return PrefixResponse(
        text=request.text, valid=is_valid_prefix(request.text, processor.config)
    )


@app.post(
    "/validate",
    summary="Check a complete notation",
    tags=["Validation"],
    responses={503: {"description": "Processor not yet initialised"}},
)
def validate_notation(request: NotationRequest) -> ValidateResponse:
    """Final validation, plus the shape the notation was read as."""
    processor = _get_processor()
    parsed = classify(request.text)
    return ValidateResponse(
        text=request.text,
        accepted=accepts(parsed, processor.config),
        shape=parsed.shape,
    )


@app.post(
    "/process",
    summary="Expand and price a notation",
    tags=["Processing"],
    responses={503: {"description": "Processor not yet initialised"}},
)
def process_notation(request: ProcessRequest) -> BetResult:
    """Returns the priced bet (`status="ok"`) or the engine error (`status="error"`).

    Engine errors are ordinary results and come back with HTTP 200; only
    malformed request bodies produce 422.
    """
    processor = _get_processor()
    return processor.run(request.text, request.channels, request.amount, request.currency)


@app.get(
    "/health",
    summary="Health check",
    tags=["System"],
    responses={503: {"description": "Processor not yet initialised"}},
)
def health_check() -> HealthResponse:
    """Returns service status and grammar configuration."""
    processor = _get_processor()
    return HealthResponse(
        status="healthy",
        version=__version__,
        max_digit_frequency=processor.config.max_digit_frequency,
        allow_simple_range=processor.config.allow_simple_range,
    )
