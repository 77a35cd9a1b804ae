"""
Field Extractors

Independent, pure extraction functions over resume text and the section map
produced by ``sections.split_sections``.
"""

import logging
import re
from datetime import datetime
from typing import Dict, List, Optional

from .config import (
    DEGREE_PATTERNS,
    SKILL_TOKEN_MAX_LENGTH,
    SKILL_TOKEN_MIN_LENGTH,
    SKILL_TOKEN_SEPARATORS,
)
from .knowledge_base import KNOWLEDGE_BASE
from .models import EducationLevel
from .skill_resolver import boundary_pattern, canonicalize_all

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PHONE_PATTERN = re.compile(r"(?<!\d)(?:\+?\d{1,3}[-.\s]?)?\(?\d{2,4}\)?[-.\s]?\d{3,4}[-.\s]?\d{3,4}(?!\d)")

_NAME_TOKEN = r"[A-Za-z][A-Za-z.'\-]*"
NAME_SHAPE = re.compile(rf"^{_NAME_TOKEN}(?:\s+{_NAME_TOKEN}){{1,4}}$")
LOOSE_NAME_SHAPE = re.compile(r"^[A-Za-z\s.]{2,60}$")

# Terms scanned across the whole text: canonical names, minus single letters
SCAN_TERMS = tuple(c for c in KNOWLEDGE_BASE.canonical_names if len(c) >= 2)

_SKILL_SPLIT = re.compile(rf"{SKILL_TOKEN_SEPARATORS}|[()]")
_LEADING_BULLETS = re.compile(r"^[\s\-*•·▪●◦■>]+")
_TRAILING_PUNCT = re.compile(r"[\s.]+$")
_SKILL_LABEL = re.compile(r"^[A-Za-z][A-Za-z /&-]{0,30}:\s*")
_NUMERIC = re.compile(r"^\d+(?:[.,]\d+)?$")

_COMPILED_DEGREES = [
    (
        EducationLevel(level),
        re.compile(words, re.IGNORECASE),
        re.compile(abbreviations) if abbreviations else None,
    )
    for level, words, abbreviations in DEGREE_PATTERNS
]

EXPERIENCE_PHRASES = [
    re.compile(r"(?<![\d.])(\d{1,2}(?:\.\d+)?)\s*\+?\s*(?:years?|yrs?)\s*(?:of\s*)?(?:experience|exp)\b", re.IGNORECASE),
    re.compile(r"experience\s*:?\s*(\d{1,2}(?:\.\d+)?)\s*\+?\s*(?:years?|yrs?)\b", re.IGNORECASE),
    re.compile(r"(?<![\d.])(\d{1,2}(?:\.\d+)?)\s*\+?\s*(?:years?|yrs?)\s+(?:in|of)\b", re.IGNORECASE),
]
YEAR_RANGE = re.compile(
    r"\b((?:19|20)\d{2})\s*(?:-|–|—|to)\s*(?:[A-Za-z]{3,9}\.?\s+)?((?:19|20)\d{2}|present|current|now)\b",
    re.IGNORECASE,
)
SINCE_YEAR = re.compile(r"\bsince\s+((?:19|20)\d{2})\b", re.IGNORECASE)


def _non_empty_lines(text: str) -> List[str]:
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


def extract_email(text: str) -> Optional[str]:
    match = EMAIL_PATTERN.search(text or "")
    return match.group(0) if match else None


def extract_phone(text: str) -> Optional[str]:
    match = PHONE_PATTERN.search(text or "")
    return match.group(0).strip() if match else None


def _looks_like_name(line: str) -> bool:
    return bool(NAME_SHAPE.match(line))


def extract_name(text: str, sections: Dict[str, str]) -> Optional[str]:
    """
    Find the candidate name.

    Tries, in order: the first name-shaped line among the first five lines of
    the header section; the line right before the first email address; the
    first non-empty line of the document under a looser rule.
    """
    for line in _non_empty_lines(sections.get("header", ""))[:5]:
        if _looks_like_name(line):
            return line

    lines = _non_empty_lines(text)
    email = extract_email(text)
    if email:
        for i, line in enumerate(lines):
            if email in line:
                if i > 0 and _looks_like_name(lines[i - 1]):
                    return lines[i - 1]
                break

    if lines:
        first = lines[0]
        if LOOSE_NAME_SHAPE.match(first) and len(first.split()) <= 5:
            return first

    return None


def tokenize_skills_section(section_text: str) -> List[str]:
    """Split a skills section into candidate skill tokens."""
    tokens = []
    for raw in _SKILL_SPLIT.split(section_text or ""):
        token = _LEADING_BULLETS.sub("", raw)
        token = _SKILL_LABEL.sub("", token)
        token = _TRAILING_PUNCT.sub("", token).strip()
        if len(token) < SKILL_TOKEN_MIN_LENGTH or len(token) > SKILL_TOKEN_MAX_LENGTH:
            continue
        if _NUMERIC.match(token):
            continue
        tokens.append(token)
    return tokens


def extract_skills(text: str, sections: Dict[str, str]) -> List[str]:
    """Keyword scan of the whole text plus tokens of the skills section, canonicalized."""
    lowered = (text or "").lower()
    found = [term for term in SCAN_TERMS if boundary_pattern(term).search(lowered)]
    found.extend(tokenize_skills_section(sections.get("skills", "")))
    return canonicalize_all(found)


def extract_education(text: str, sections: Dict[str, str]) -> List[EducationLevel]:
    source = sections.get("education") or text or ""
    levels = []
    for level, words, abbreviations in _COMPILED_DEGREES:
        if words.search(source) or (abbreviations is not None and abbreviations.search(source)):
            levels.append(level)
    return levels


def extract_experience_years(text: str, sections: Dict[str, str], current_year: Optional[int] = None) -> int:
    """
    Years of experience, from the first rule that yields a value:

    1. an explicit "N years of experience" style phrase
    2. the summed spans of year ranges ("2018 - 2021", "2020 - present"),
       read from the experience section when there is one
    3. a "since YYYY" phrase
    4. 0
    """
    text = text or ""
    current_year = current_year or datetime.now().year

    for pattern in EXPERIENCE_PHRASES:
        match = pattern.search(text)
        if match:
            years = int(float(match.group(1)))
            logger.debug(f"Experience from explicit phrase: {years} years")
            return years

    source = sections.get("experience") or text
    total = 0
    for match in YEAR_RANGE.finditer(source):
        start = int(match.group(1))
        end_raw = match.group(2).lower()
        end = current_year if end_raw in ("present", "current", "now") else int(end_raw)
        total += max(0, end - start)
    if total > 0:
        logger.debug(f"Experience from year ranges: {total} years")
        return total

    match = SINCE_YEAR.search(text)
    if match:
        years = max(0, current_year - int(match.group(1)))
        logger.debug(f"Experience from 'since' phrase: {years} years")
        return years

    return 0


def extract_summary(sections: Dict[str, str]) -> Optional[str]:
    """First paragraph of the summary section, whitespace-normalized."""
    section = sections.get("summary", "")
    if not section:
        return None
    paragraph = re.split(r"\n\s*\n", section.strip(), maxsplit=1)[0]
    return re.sub(r"\s+", " ", paragraph).strip() or None


def extract_certifications(sections: Dict[str, str]) -> List[str]:
    items = [_LEADING_BULLETS.sub("", line).strip() for line in _non_empty_lines(sections.get("certifications", ""))]
    return [item for item in items if item]
