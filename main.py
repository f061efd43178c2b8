"""
Kundali Calc — FastAPI Backend
==============================
Endpoints:
  POST /api/kundali    — Birth chart (planets, houses, panchang, dasha, D1/D9)
  POST /api/panchang   — Daily panchang for a date and place
  GET  /api/transits   — Planetary transits now, or at ?at=ISO-8601
  POST /api/dasha      — Vimshottari dasha and the periods running now
  GET  /api/health     — Health check
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from kundali_calc import (
    InvalidBirthDataError, UnknownTimezoneError,
    current_transits, daily_panchang, dasha_for_birth, generate_kundali,
)
from kundali_calc import __version__
from kundali_calc.config import configure_logging, get_settings

logger = logging.getLogger("kundali_calc.api")

configure_logging(get_settings())

app = FastAPI(
    title="Kundali Calc API",
    version=__version__,
    description="Sidereal Vedic astrology engine: Kundali, Panchang, Dasha, Transits",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Request Models ─────────────────────────────────────────────
# Presence and range checks happen in the engine, so a missing field is a
# 400 with reason "missing_field" rather than a schema error.

class BirthData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date_of_birth: Optional[str] = Field(None, alias="dateOfBirth", description="YYYY-MM-DD")
    time_of_birth: Optional[str] = Field(None, alias="timeOfBirth", description="HH:MM, 24-hour local time")
    latitude:      Optional[float] = Field(None, description="degrees, north positive")
    longitude:     Optional[float] = Field(None, description="degrees, east positive")
    timezone:      Optional[str] = Field("UTC", description="IANA zone or fixed offset")

    def as_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class PanchangRequest(BaseModel):
    date:      str = Field(..., description="YYYY-MM-DD")
    latitude:  float
    longitude: float
    timezone:  str = "UTC"


# ── Error mapping ──────────────────────────────────────────────

@app.exception_handler(InvalidBirthDataError)
def invalid_birth_data_handler(request: Request, exc: InvalidBirthDataError):
    logger.info("Rejected %s %s: %s (%s)", request.method, request.url.path,
                exc.message, exc.reason.value)
    return JSONResponse(status_code=400, content=exc.to_dict())


@app.exception_handler(UnknownTimezoneError)
def unknown_timezone_handler(request: Request, exc: UnknownTimezoneError):
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={
        "error": "unknown_timezone", "reason": "invalid_timezone", "message": str(exc),
    })


@app.exception_handler(Exception)
def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "internal_error", "message": str(exc)})


# ── Endpoints ──────────────────────────────────────────────────

@app.get("/api/health")
def health():
    return {
        "status": "ok",
        "service": "Kundali Calc API",
        "version": __version__,
        "endpoints": [
            "POST /api/kundali",
            "POST /api/panchang",
            "GET /api/transits",
            "POST /api/dasha",
        ],
        "note": "All calculations use Lahiri Ayanamsa and whole sign houses",
    }


@app.post("/api/kundali")
def kundali_endpoint(data: BirthData):
    chart = generate_kundali(data.as_payload(), as_of=datetime.now(timezone.utc))
    return {"success": True, "chart": chart.to_dict()}


@app.post("/api/panchang")
def panchang_endpoint(data: PanchangRequest):
    result = daily_panchang(data.date, data.latitude, data.longitude, data.timezone)
    return {"success": True, "panchang": result.to_dict()}


@app.get("/api/transits")
def transits_endpoint(at: Optional[datetime] = None):
    report = current_transits(at)
    return {"success": True, **report.to_dict()}


@app.post("/api/dasha")
def dasha_endpoint(data: BirthData):
    report = dasha_for_birth(data.as_payload(), as_of=datetime.now(timezone.utc))
    return {"success": True, **report.to_dict()}
