"""
Deterministic Resume Parsing & ATS Scoring

This package provides a two-step pipeline:
1. Resume text -> structured CandidateProfile (rule-based, optional LLM oracle)
2. (profile, job) -> transparent 0-100 ATS score with a full breakdown

Usage:
    from ats_engine import parse_resume, calculate_ats_score, JobRequirement

    profile = parse_resume(resume_text)
    result = calculate_ats_score(profile, JobRequirement(title="Backend Engineer"))
    print(f"ATS score: {result.total_score}")
"""

from .config import WEIGHTS
from .matcher import evaluate_candidate, rank_candidates
from .models import (
    CandidateEvaluation,
    CandidateProfile,
    EducationLevel,
    JobRequirement,
    MatchKind,
    ScoreBreakdown,
)
from .resume_parser import ResumeParser, parse_resume, parse_resume_document
from .scoring_engine import calculate_ats_score

__all__ = [
    "parse_resume",
    "parse_resume_document",
    "calculate_ats_score",
    "evaluate_candidate",
    "rank_candidates",
    "ResumeParser",
    "CandidateProfile",
    "CandidateEvaluation",
    "JobRequirement",
    "ScoreBreakdown",
    "EducationLevel",
    "MatchKind",
    "WEIGHTS",
]
__version__ = "1.0.0"
