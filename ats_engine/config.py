"""
Configuration for the resume parsing and ATS scoring engine.
Adjust weights and parameters here.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Dimension maxima (points). Skills is split into required + nice-to-have,
# experience into base + bonus. All maxima sum to 100.
WEIGHTS = {
    "required_skills": 35,
    "nice_to_have_skills": 5,
    "experience": 25,
    "experience_bonus": 5,
    "education": 15,
    "job_title_relevance": 15,
}

MAX_SCORE = 100

# Partial-credit ladder for a single required skill
MATCH_SCORES = {
    "exact": 1.0,
    "fuzzy": 0.8,
    "category": 0.3,
    "none": 0.0,
}

# Fuzzy matching parameters
FUZZY_MAX_EDIT_DISTANCE = 2
FUZZY_MIN_SKILL_LENGTH = 5
FUZZY_MIN_CANDIDATE_LENGTH = 4

# Compiled whole-word patterns kept in memory (terms can come from requests)
PATTERN_CACHE_SIZE = 1024

# Resume text gate
MIN_TEXT_LENGTH = 20
INSUFFICIENT_DATA = "insufficient data"

# Section splitting
HEADER_MAX_LENGTH = 60
DEFAULT_SECTION = "header"
FULL_TEXT_SECTION = "full_text"

SECTION_HEADERS = {
    "experience": [
        "experience",
        "work experience",
        "professional experience",
        "relevant experience",
        "employment",
        "employment history",
        "work history",
        "career history",
        "professional background",
    ],
    "education": [
        "education",
        "education and training",
        "educational background",
        "academic background",
        "academic qualifications",
        "academics",
        "qualifications",
    ],
    "skills": [
        "skills",
        "technical skills",
        "core skills",
        "key skills",
        "skill set",
        "skillset",
        "core competencies",
        "competencies",
        "technologies",
        "tech stack",
        "technical proficiencies",
        "tools and technologies",
        "tools & technologies",
    ],
    "summary": [
        "summary",
        "professional summary",
        "executive summary",
        "profile",
        "professional profile",
        "about me",
        "objective",
        "career objective",
    ],
    "projects": [
        "projects",
        "personal projects",
        "key projects",
        "academic projects",
        "side projects",
        "selected projects",
    ],
    "certifications": [
        "certifications",
        "certification",
        "certificates",
        "professional certifications",
        "licenses",
        "licenses and certifications",
        "licenses & certifications",
    ],
}

# Skills section tokenizing
SKILL_TOKEN_SEPARATORS = r"[,|\n;•·▪●◦■]"
SKILL_TOKEN_MIN_LENGTH = 2
SKILL_TOKEN_MAX_LENGTH = 40

# Education degree patterns, highest rank first: (level, words, abbreviations).
# Words match case-insensitively. Short abbreviations ("BE", "MS", "BA") only
# match in upper case so that ordinary words like "be" or "ms" do not count.
DEGREE_PATTERNS = [
    (
        "phd",
        r"\b(?:ph\.?\s?d\.?|doctorate|doctoral|doctor of philosophy)(?![a-z])",
        None,
    ),
    (
        "masters",
        r"\b(?:master'?s?|m\.?b\.?a\.?|m\.?\s?tech|m\.?sc)(?![a-z])",
        r"\b(?:M\.?S\.?|M\.?E\.?)(?![A-Za-z])",
    ),
    (
        "bachelors",
        r"\b(?:bachelor'?s?|b\.?\s?tech|b\.?com|b\.?sc)(?![a-z])",
        r"\b(?:B\.?S\.?|B\.?E\.?|B\.?A\.?)(?![A-Za-z])",
    ),
    (
        "diploma",
        r"\b(?:diploma|associate'?s?)(?![a-z])",
        None,
    ),
]

EDUCATION_RANK = {
    "diploma": 1,
    "bachelors": 2,
    "masters": 3,
    "phd": 4,
}

# Job description markers for soft requirements
NICE_TO_HAVE_MARKERS = [
    "nice to have",
    "nice-to-have",
    "good to have",
    "good-to-have",
    "preferred",
    "bonus",
    "plus",
    "desired",
    "optional",
]

# Character distance between a skill mention and the nearest marker.
# Tunable heuristic, kept at 200 for score compatibility.
NICE_TO_HAVE_PROXIMITY = 200

PARSER_VERSIONS = {
    "rules": "rules-v1",
    "llm": "llm-v1",
}

# LLM configuration
LLM_CONFIG = {
    "temperature": 0,  # For maximum consistency
    "model": "gpt-4o",  # Default model
    "max_retries": 0,  # Single-shot, fallback handles failures
    "timeout_seconds": 30,
}


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_settings():
    """Build runtime settings from the environment (.env files included)."""
    from .models import Settings

    load_dotenv()
    load_dotenv(dotenv_path=Path(__file__).resolve().parent.parent / ".env", override=False)

    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        model_name=os.getenv("OPENAI_MODEL", LLM_CONFIG["model"]),
        use_llm_parser=_env_flag("USE_LLM_PARSER"),
        llm_timeout_seconds=float(os.getenv("LLM_TIMEOUT_SECONDS", str(LLM_CONFIG["timeout_seconds"]))),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
