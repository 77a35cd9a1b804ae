"""
Job Skill Extractor

Mines a job description for registered skills and splits them into required
and nice-to-have, based on how close each mention sits to a soft-requirement
marker ("preferred", "bonus", "nice to have", ...).
"""

import logging
from typing import List, Optional, Tuple

from .config import NICE_TO_HAVE_MARKERS, NICE_TO_HAVE_PROXIMITY
from .knowledge_base import KNOWLEDGE_BASE
from .models import JobSkills, SkillGroup
from .skill_resolver import boundary_pattern

logger = logging.getLogger(__name__)


def find_marker_positions(description: str) -> List[int]:
    """Start offsets of every soft-requirement marker, sorted."""
    positions = set()
    for marker in NICE_TO_HAVE_MARKERS:
        positions.update(m.start() for m in boundary_pattern(marker).finditer(description))
    return sorted(positions)


def first_occurrence(group: SkillGroup, description: str) -> Optional[int]:
    """Earliest whole-word mention of the skill under any of its names."""
    best = None
    for term in (group.canonical, *sorted(group.variants)):
        if len(term) < 2:
            continue
        match = boundary_pattern(term).search(description)
        if match and (best is None or match.start() < best):
            best = match.start()
    return best


def extract_job_skills(description: str, proximity: int = NICE_TO_HAVE_PROXIMITY) -> JobSkills:
    """
    Classify every registered skill mentioned in a job description.

    A skill is nice-to-have when its first mention is less than ``proximity``
    characters from the nearest marker, otherwise required. Both lists hold
    canonical names in order of first mention and never overlap.
    """
    if not description:
        return JobSkills()

    markers = find_marker_positions(description)
    found: List[Tuple[int, str]] = []
    for group in KNOWLEDGE_BASE.groups:
        index = first_occurrence(group, description)
        if index is not None:
            found.append((index, group.canonical))
    found.sort(key=lambda item: item[0])

    required, nice_to_have = [], []
    for index, canonical in found:
        if markers and min(abs(index - m) for m in markers) < proximity:
            nice_to_have.append(canonical)
        else:
            required.append(canonical)

    logger.debug(f"Job description skills: required={required}, nice_to_have={nice_to_have}")
    return JobSkills(required=required, nice_to_have=nice_to_have)
