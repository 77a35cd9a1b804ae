from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from ats_engine import __version__
from ats_engine.config import get_settings
from ats_engine.llm_extractor import build_llm_oracle
from ats_engine.matcher import evaluate_candidate
from ats_engine.models import (
    ATSScoreRequest,
    CandidateEvaluation,
    CandidateProfile,
    EvaluateCandidateRequest,
    ParseResumeRequest,
    ScoreBreakdown,
    Settings,
)
from ats_engine.resume_parser import ProfileOracle, parse_resume
from ats_engine.scoring_engine import calculate_ats_score


load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="ATS Resume Scoring API", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def _build_oracle(model_name: str, api_key: Optional[str], timeout: float) -> Optional[ProfileOracle]:
    try:
        return build_llm_oracle(Settings(openai_api_key=api_key, model_name=model_name, llm_timeout_seconds=timeout))
    except Exception as e:
        logger.error(f"Could not build LLM parser, using rule-based parsing only: {e}", exc_info=True)
        return None


def get_oracle(settings: Settings = Depends(get_settings)) -> Optional[ProfileOracle]:
    if not settings.use_llm_parser:
        return None
    return _build_oracle(settings.model_name, settings.openai_api_key, settings.llm_timeout_seconds)


@app.get("/")
async def root():
    return {"service": "ats-engine", "version": __version__, "status": "ok"}


@app.post("/api/parse-resume", response_model=CandidateProfile)
def parse_resume_endpoint(request: ParseResumeRequest, oracle: Optional[ProfileOracle] = Depends(get_oracle)):
    return parse_resume(request.text, use_external_oracle=request.use_external_oracle, oracle=oracle)


@app.post("/api/ats-score", response_model=ScoreBreakdown)
def ats_score_endpoint(request: ATSScoreRequest):
    return calculate_ats_score(request.profile, request.job)


@app.post("/api/evaluate", response_model=CandidateEvaluation)
def evaluate_endpoint(request: EvaluateCandidateRequest, oracle: Optional[ProfileOracle] = Depends(get_oracle)):
    try:
        return evaluate_candidate(
            request.resume_text,
            request.job,
            use_external_oracle=request.use_external_oracle,
            oracle=oracle,
        )
    except ValueError as e:
        logger.error(f"Evaluation request failed: {e}")
        raise HTTPException(status_code=422, detail=str(e))
