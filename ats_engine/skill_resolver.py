"""
Skill Resolver

Canonicalization, category lookup and the exact / fuzzy / category matching
ladder, all built on the shared Skill Knowledge Base.
"""

import logging
import re
from functools import lru_cache
from typing import Iterable, Optional, Set

from rapidfuzz.distance import Levenshtein

from .config import FUZZY_MAX_EDIT_DISTANCE, FUZZY_MIN_CANDIDATE_LENGTH, FUZZY_MIN_SKILL_LENGTH, PATTERN_CACHE_SIZE
from .knowledge_base import KNOWLEDGE_BASE
from .models import MatchKind, SkillCategory, SkillMatch

logger = logging.getLogger(__name__)

_FRAMEWORK_SUFFIX = re.compile(r"\.(?:js|ts)$")


@lru_cache(maxsize=PATTERN_CACHE_SIZE)
def boundary_pattern(term: str) -> "re.Pattern[str]":
    """
    Whole-word, case-insensitive pattern for a skill term.

    Boundaries are alphanumerics rather than ``\\b`` so that terms such as
    "c++", "c#" or ".net" still match when followed by a space.
    """
    return re.compile(rf"(?<![a-z0-9]){re.escape(term)}(?![a-z0-9])", re.IGNORECASE)


def canonicalize(term: str) -> str:
    """Return the canonical skill name; unknown terms pass through lowercased."""
    if not term:
        return ""
    cleaned = term.strip().lower()
    return KNOWLEDGE_BASE.lookup(cleaned) or cleaned


def canonicalize_all(terms: Iterable[str]) -> list:
    """Canonicalize and de-duplicate, keeping first-seen order."""
    seen = {}
    for term in terms:
        canon = canonicalize(term)
        if canon and canon not in seen:
            seen[canon] = None
    return list(seen)


def category_of(skill: str) -> Optional[SkillCategory]:
    return KNOWLEDGE_BASE.category(canonicalize(skill))


def variants_of(skill: str) -> Set[str]:
    """Canonical + registered variants + the term itself + its suffix-stripped form."""
    lower = skill.strip().lower()
    canon = canonicalize(lower)
    variants = {canon, lower}

    group = KNOWLEDGE_BASE.group(canon)
    if group is not None:
        variants.update(group.variants)

    base = _FRAMEWORK_SUFFIX.sub("", lower)
    if base and base != lower:
        variants.add(base)

    variants.discard("")
    return variants


def text_contains_skill(skill: str, candidate_skills: Iterable[str], raw_text: Optional[str]) -> bool:
    """True if any variant is a candidate skill or appears as a whole word in the raw text."""
    variants = variants_of(skill)
    candidates = {cs.strip().lower() for cs in candidate_skills if cs}
    if variants & candidates:
        return True
    if not raw_text:
        return False
    return any(boundary_pattern(v).search(raw_text) for v in variants)


def fuzzy_match(
    skill: str,
    candidate_skills: Iterable[str],
    max_edit_distance: int = FUZZY_MAX_EDIT_DISTANCE,
) -> Optional[str]:
    """
    Return the first candidate skill within ``max_edit_distance`` edits.

    Only attempted for skills of at least 5 characters, and only against
    candidate skills of at least 4 characters.
    """
    lower = skill.strip().lower()
    if len(lower) < FUZZY_MIN_SKILL_LENGTH:
        return None

    for cs in candidate_skills:
        if len(cs) < FUZZY_MIN_CANDIDATE_LENGTH:
            continue
        distance = Levenshtein.distance(lower, cs.strip().lower(), score_cutoff=max_edit_distance)
        if distance <= max_edit_distance:
            logger.debug(f"Fuzzy match: '{lower}' ~ '{cs}' (distance {distance})")
            return cs
    return None


def score_match(required_skill: str, candidate_skills: Iterable[str], raw_text: Optional[str]) -> SkillMatch:
    """
    Partial-credit ladder for one required skill.

    - exact (1.0): synonym-aware match in the skill list or whole-word in text
    - fuzzy (0.8): a candidate skill within edit distance 2
    - category (0.3): a candidate skill in the same category
    - none (0.0)
    """
    candidates = list(candidate_skills)

    if text_contains_skill(required_skill, candidates, raw_text):
        return SkillMatch(skill=required_skill, kind=MatchKind.EXACT, score=MatchKind.EXACT.weight)

    fuzzy = fuzzy_match(required_skill, candidates)
    if fuzzy is not None:
        return SkillMatch(skill=required_skill, kind=MatchKind.FUZZY, score=MatchKind.FUZZY.weight, matched=fuzzy)

    category = category_of(required_skill)
    if category is not None:
        for cs in candidates:
            if category_of(cs) == category:
                logger.debug(f"Category match: '{required_skill}' ~ '{cs}' ({category.value})")
                return SkillMatch(
                    skill=required_skill,
                    kind=MatchKind.CATEGORY,
                    score=MatchKind.CATEGORY.weight,
                    matched=cs,
                )

    return SkillMatch(skill=required_skill, kind=MatchKind.NONE, score=MatchKind.NONE.weight)
