#!/usr/bin/env python3
"""Local JSON API for scam indicator extraction and risk tiers."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from Indicator_Engine.indicator_extractor import MAX_INDICATORS, extract_threat_indicators
from Risk_Engine.risk_tiers import (
    HIGH_THRESHOLD,
    LOW_STATUS_PERCENT,
    MODERATE_THRESHOLD,
    VERY_HIGH_THRESHOLD,
    classify_risk,
)
from webui.env_utils import env_int, load_dotenv
from webui.report_builder import build_risk_report


ROOT = Path(__file__).resolve().parents[1]
load_dotenv(ROOT / ".env")

logger = logging.getLogger(__name__)

MAX_TEXT_CHARS = env_int("WEBUI_MAX_TEXT_CHARS", 20000, min_value=1)
MAX_LABEL_CHARS = 200

app = FastAPI(title="Scam Indicator Triage API", version="1.0")


class IndicatorRequest(BaseModel):
    explanation: str = Field(default="", max_length=MAX_TEXT_CHARS)


class RiskRequest(BaseModel):
    status: str | None = Field(default=None, max_length=MAX_LABEL_CHARS)
    probability: str | float | None = Field(default=None)


class ReportRequest(BaseModel):
    explanation: str = Field(default="", max_length=MAX_TEXT_CHARS)
    status: str | None = Field(default=None, max_length=MAX_LABEL_CHARS)
    probability: str | float | None = Field(default=None)
    content: str | None = Field(default=None, max_length=MAX_TEXT_CHARS)
    summary: str | None = Field(default=None, max_length=MAX_TEXT_CHARS)


@app.get("/api/config")
def get_config() -> JSONResponse:
    return JSONResponse(
        {
            "app_name": "Scam Indicator Triage",
            "max_text_chars": MAX_TEXT_CHARS,
            "max_indicators": MAX_INDICATORS,
            "thresholds": {
                "very_high": VERY_HIGH_THRESHOLD,
                "high": HIGH_THRESHOLD,
                "moderate": MODERATE_THRESHOLD,
                "low_status_percent": LOW_STATUS_PERCENT,
            },
        }
    )


@app.post("/api/indicators")
def post_indicators(payload: IndicatorRequest) -> JSONResponse:
    return JSONResponse({"indicators": extract_threat_indicators(payload.explanation)})


@app.post("/api/risk")
def post_risk(payload: RiskRequest) -> JSONResponse:
    tier = classify_risk(status=payload.status, probability=payload.probability)
    return JSONResponse({"risk": tier.as_dict()})


@app.post("/api/report")
def post_report(payload: ReportRequest) -> JSONResponse:
    try:
        report = build_risk_report(
            explanation=payload.explanation,
            status=payload.status,
            probability=payload.probability,
            content=payload.content,
            summary=payload.summary,
        )
    except (OSError, ValueError) as exc:
        logger.exception("report build failed")
        raise HTTPException(status_code=500, detail=f"Failed to build report: {exc}") from exc
    return JSONResponse(report)
