"""
Deterministic Scoring Engine

All scoring functions are deterministic - same inputs produce same outputs.
No AI/LLM is used in this module.

Dimensions (points):
- Skills: 35 required + 5 nice-to-have
- Experience: 25 base + 5 bonus
- Education: 15
- Job title relevance: 15
"""

import logging
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from .config import INSUFFICIENT_DATA, MAX_SCORE, WEIGHTS
from .extractors import extract_education
from .job_skills import extract_job_skills
from .models import (
    CandidateProfile,
    EducationLevel,
    EducationScore,
    ExperienceScore,
    JobRequirement,
    JobSkills,
    JobTitleScore,
    MatchKind,
    ScoreBreakdown,
    SkillsScore,
)
from .skill_resolver import canonicalize_all, score_match, text_contains_skill

logger = logging.getLogger(__name__)

_TITLE_SPLIT = re.compile(r"[\s/,.\-()|&:;!?'\"]+")


def round_score(value: float) -> float:
    """Round to 2 decimals, halves away from zero (3.125 -> 3.13)."""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _fmt(value: float) -> str:
    return f"{value:g}"


def _listing(items: List[str]) -> str:
    return ", ".join(items) or "none"


def calculate_skills_score(
    job: JobRequirement,
    profile: CandidateProfile,
    job_skills: Optional[JobSkills] = None,
) -> SkillsScore:
    """
    Calculate the skills dimension (0-40).

    Formula:
    - Required set: explicit job skills + skills the description requires
    - Required: sum of per-skill ladder scores / required count * 35
      (empty required set = full 35)
    - Nice-to-have: exact matches / nice-to-have count * 5 (empty set = 0)
    """
    if job_skills is None:
        job_skills = extract_job_skills(job.description)

    required = canonicalize_all([*job.required_skills, *job_skills.required])
    nice_to_have = [s for s in job_skills.nice_to_have if s not in required]
    candidate_skills = [s.lower() for s in profile.skills]
    raw_text = profile.raw_text

    required_max = WEIGHTS["required_skills"]
    nice_max = WEIGHTS["nice_to_have_skills"]

    matches = [score_match(skill, candidate_skills, raw_text) for skill in required]
    matched = [m.skill for m in matches if m.kind in (MatchKind.EXACT, MatchKind.FUZZY)]
    partial = [m for m in matches if m.kind == MatchKind.CATEGORY]
    missing = [m.skill for m in matches if m.kind in (MatchKind.CATEGORY, MatchKind.NONE)]

    if required:
        total = sum(m.score for m in matches)
        required_score = round_score(total / len(required) * required_max)
        detail = f"Matched {len(matched)} of {len(required)} required skills [{_listing(matched)}]."
        if partial:
            detail += f" Partial credit for [{_listing([f'{m.skill} ~ {m.matched}' for m in partial])}]."
        detail += f" Missing: [{_listing(missing)}]."
        logger.debug(f"Required skills: {total}/{len(required)} = {required_score}")
    else:
        required_score = float(required_max)
        detail = "No specific skills required."
        logger.debug(f"No required skills specified, score = {required_score}")

    if nice_to_have:
        nice_matched = [s for s in nice_to_have if text_contains_skill(s, candidate_skills, raw_text)]
        nice_score = round_score(len(nice_matched) / len(nice_to_have) * nice_max)
        detail += f" Nice-to-have: {len(nice_matched)} of {len(nice_to_have)} [{_listing(nice_matched)}]."
    else:
        nice_matched = []
        nice_score = 0.0

    score = round_score(required_score + nice_score)
    logger.info(f"Skills score: {score}/{required_max + nice_max}")

    return SkillsScore(
        score=score,
        max=required_max + nice_max,
        detail=detail,
        required_score=required_score,
        required_max=required_max,
        nice_to_have_score=nice_score,
        nice_to_have_max=nice_max,
        required_skills=required,
        matches=matches,
        matched_skills=matched,
        missing_skills=missing,
        match_ratio=f"{len(matched)}/{len(required)}",
        nice_to_have_skills=nice_to_have,
        nice_to_have_matched=nice_matched,
        nice_to_have_missing=[s for s in nice_to_have if s not in nice_matched],
    )


def calculate_experience_score(required_years: int, candidate_years: int) -> ExperienceScore:
    """
    Calculate the experience dimension (0-30).

    Formula:
    - required == 0 or candidate >= required: full 25
    - candidate > required > 0: bonus min((candidate - required) / required, 1) * 5
    - 0 < candidate < required: candidate / required * 25
    - candidate == 0 < required: 0
    """
    base_max = WEIGHTS["experience"]
    bonus_max = WEIGHTS["experience_bonus"]
    bonus = 0.0

    if required_years == 0:
        base = float(base_max)
        logger.debug("No experience required, full base score")
    elif candidate_years >= required_years:
        base = float(base_max)
        if candidate_years > required_years:
            bonus = round_score(min((candidate_years - required_years) / required_years, 1) * bonus_max)
        logger.debug(f"Experience: {candidate_years} >= {required_years} years, bonus = {bonus}")
    elif candidate_years > 0:
        base = round_score(candidate_years / required_years * base_max)
        logger.debug(f"Experience: {candidate_years} < {required_years} years, score = {base}")
    else:
        base = 0.0
        logger.debug(f"Experience: none detected, {required_years} years required")

    score = round_score(base + bonus)
    logger.info(f"Experience score: {score}/{base_max + bonus_max}")

    return ExperienceScore(
        score=score,
        max=base_max + bonus_max,
        detail=f"Candidate has {candidate_years} years, job requires {required_years} years.",
        base_score=base,
        bonus=bonus,
        candidate_years=candidate_years,
        required_years=required_years,
    )


def resolve_education_level(label: Optional[str]) -> Optional[EducationLevel]:
    """Map a free-form requirement ("Bachelor's", "MS", "phd") onto an EducationLevel."""
    if not label:
        return None
    cleaned = label.strip()
    try:
        return EducationLevel(cleaned.lower())
    except ValueError:
        pass
    levels = extract_education(cleaned, {})
    return max(levels) if levels else None


def calculate_education_score(required_level: Optional[str], candidate_education: List[EducationLevel]) -> EducationScore:
    """
    Calculate the education dimension (0-15).

    Formula:
    - No (or unrecognized) requirement: full 15
    - Highest candidate rank >= required rank: full 15
    - Otherwise: candidate_rank / required_rank * 15 (0 with no degree detected)
    """
    max_points = WEIGHTS["education"]
    candidate_rank = max((e.rank for e in candidate_education), default=0)
    held = _listing([e.value for e in candidate_education]) if candidate_education else "none detected"

    if not required_level:
        logger.info(f"Education score: {max_points}/{max_points} (no requirement)")
        return EducationScore(
            score=float(max_points),
            max=max_points,
            detail="No specific education required.",
            candidate_education=candidate_education,
            candidate_rank=candidate_rank,
        )

    required = resolve_education_level(required_level)
    required_rank = required.rank if required else 0

    if candidate_rank >= required_rank:
        score = float(max_points)
    elif candidate_rank > 0:
        score = round_score(candidate_rank / required_rank * max_points)
    else:
        score = 0.0

    if required is None:
        logger.warning(f"Unrecognized education requirement '{required_level}', awarding full score")

    logger.info(f"Education score: {score}/{max_points}")
    return EducationScore(
        score=score,
        max=max_points,
        detail=f"Candidate has [{held}], job requires {required_level}.",
        candidate_education=candidate_education,
        required_education=required.value if required else required_level,
        candidate_rank=candidate_rank,
        required_rank=required_rank,
    )


def title_keywords(title: str) -> List[str]:
    """Job title tokens longer than two characters, lowercased."""
    return [t for t in _TITLE_SPLIT.split((title or "").lower()) if len(t) > 2]


def calculate_title_score(title: str, raw_text: str) -> JobTitleScore:
    """
    Calculate job-title relevance (0-15).

    Formula: title keywords found anywhere in the resume text / keyword count * 15.
    A title without usable keywords counts as a full match.
    """
    max_points = WEIGHTS["job_title_relevance"]
    keywords = title_keywords(title)
    text_lower = (raw_text or "").lower()
    matched = [k for k in keywords if k in text_lower]

    ratio = len(matched) / len(keywords) if keywords else 1
    score = round_score(ratio * max_points)
    logger.info(f"Job title relevance score: {score}/{max_points}")

    return JobTitleScore(
        score=score,
        max=max_points,
        detail=f"Matched keywords [{_listing(matched)}] from job title \"{title}\".",
        matched_keywords=matched,
        job_title_keywords=keywords,
    )


def insufficient_data_score() -> ScoreBreakdown:
    return ScoreBreakdown(
        total_score=0,
        sufficient_data=False,
        breakdown={},
        explanation=[INSUFFICIENT_DATA],
        scoring_weights=WEIGHTS,
    )


def calculate_ats_score(profile: CandidateProfile, job: JobRequirement) -> ScoreBreakdown:
    """
    Calculate the ATS score for a parsed resume against a job.

    Args:
        profile: Parsed candidate profile
        job: Job requirement record

    Returns:
        ScoreBreakdown with total_score (0-100), per-dimension breakdown and
        one explanation line per dimension. Profiles carrying an error score 0
        with ``sufficient_data`` False.
    """
    if profile is None or profile.error:
        logger.warning("Insufficient data to score candidate")
        return insufficient_data_score()

    logger.info("=" * 60)
    logger.info(f"Starting ATS score calculation for '{job.title}'")
    logger.info("=" * 60)

    skills = calculate_skills_score(job, profile)
    experience = calculate_experience_score(job.min_experience, profile.experience_years)
    education = calculate_education_score(job.education_level, profile.education)
    title = calculate_title_score(job.title, profile.raw_text)

    total = min(MAX_SCORE, round_score(skills.score + experience.score + education.score + title.score))

    explanation = [
        f"Skills: {_fmt(skills.score)}/{_fmt(skills.max)} - {skills.detail}",
        f"Experience: {_fmt(experience.score)}/{_fmt(experience.max)} - {experience.detail}",
        f"Education: {_fmt(education.score)}/{_fmt(education.max)} - {education.detail}",
        f"Job Title Relevance: {_fmt(title.score)}/{_fmt(title.max)} - {title.detail}",
    ]

    logger.info("=" * 60)
    logger.info(f"FINAL ATS SCORE: {total}")
    logger.info("=" * 60)

    return ScoreBreakdown(
        total_score=total,
        max_score=MAX_SCORE,
        sufficient_data=True,
        breakdown={
            "skills": skills,
            "experience": experience,
            "education": education,
            "job_title_relevance": title,
        },
        explanation=explanation,
        scoring_weights=WEIGHTS,
    )
