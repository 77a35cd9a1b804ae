"""
Section Splitter

Segments raw resume text into labeled zones using header-line heuristics.
Same input text always yields the same section map.
"""

import logging
import re
from typing import Dict, List, Optional

from .config import DEFAULT_SECTION, FULL_TEXT_SECTION, HEADER_MAX_LENGTH, SECTION_HEADERS

logger = logging.getLogger(__name__)


def _compile_header_pattern(phrases: List[str]) -> "re.Pattern[str]":
    alternatives = "|".join(r"\s+".join(re.escape(word) for word in phrase.split()) for phrase in phrases)
    # Whole line must be the phrase, ignoring bullets, numbering marks and a trailing colon
    return re.compile(rf"^[\W_]*(?:{alternatives})[\W_]*$", re.IGNORECASE)


HEADER_PATTERNS = {section: _compile_header_pattern(phrases) for section, phrases in SECTION_HEADERS.items()}


def detect_header(line: str) -> Optional[str]:
    """Return the section a line opens, or None if it is not a header line."""
    stripped = line.strip()
    if not stripped or len(stripped) >= HEADER_MAX_LENGTH:
        return None
    for section, pattern in HEADER_PATTERNS.items():
        if pattern.match(stripped):
            return section
    return None


def split_sections(text: str) -> Dict[str, str]:
    """
    Split resume text into sections.

    Returns a mapping of section name to text. Lines before the first
    recognized header go under ``header``; repeated headers append to the
    same section; the whole document is kept under ``full_text``.
    """
    collected: Dict[str, List[str]] = {DEFAULT_SECTION: []}
    current = DEFAULT_SECTION

    for line in (text or "").splitlines():
        section = detect_header(line)
        if section is not None:
            current = section
            collected.setdefault(current, [])
            continue
        collected[current].append(line)

    sections = {name: "\n".join(lines).strip() for name, lines in collected.items()}
    sections[FULL_TEXT_SECTION] = text or ""

    logger.debug(f"Sections detected: {detected_sections(sections)}")
    return sections


def detected_sections(sections: Dict[str, str]) -> List[str]:
    """Recognized section names, in the order they first appear."""
    return [name for name in sections if name not in (DEFAULT_SECTION, FULL_TEXT_SECTION)]
