"""
Resume Parser

Orchestrates the parse of one resume:
1. Reject text too short to carry any signal
2. Optionally ask an external oracle (e.g. an LLM) for a ready-made profile
3. Otherwise split sections and run every field extractor
"""

import logging
from typing import Optional, Protocol

from .config import INSUFFICIENT_DATA, MIN_TEXT_LENGTH, PARSER_VERSIONS
from .extractors import (
    extract_certifications,
    extract_education,
    extract_email,
    extract_experience_years,
    extract_name,
    extract_phone,
    extract_skills,
    extract_summary,
)
from .models import CandidateProfile
from .sections import detected_sections, split_sections
from .text_extraction import TextExtractionError, TextExtractor, decode_text_document

logger = logging.getLogger(__name__)


class ProfileOracle(Protocol):
    """Anything that can turn resume text into a profile, or give up with None."""

    def parse(self, text: str) -> Optional[CandidateProfile]:
        ...


class ResumeParser:
    """Rule-based resume parser with an optional injected oracle."""

    def __init__(self, oracle: Optional[ProfileOracle] = None):
        self.oracle = oracle

    def parse(self, raw_text: str, use_external_oracle: bool = False) -> CandidateProfile:
        raw_text = raw_text or ""
        if len(raw_text.strip()) < MIN_TEXT_LENGTH:
            logger.warning(f"Resume text too short to parse ({len(raw_text.strip())} chars)")
            return CandidateProfile(error=INSUFFICIENT_DATA, raw_text=raw_text)

        if use_external_oracle:
            profile = self._parse_with_oracle(raw_text)
            if profile is not None:
                return profile

        return self._parse_with_rules(raw_text)

    def _parse_with_oracle(self, raw_text: str) -> Optional[CandidateProfile]:
        if self.oracle is None:
            logger.warning("External parser requested but none configured, using rule-based parser")
            return None

        try:
            profile = self.oracle.parse(raw_text)
        except Exception as e:
            logger.warning(f"External parser failed, falling back to rule-based parser: {e}")
            return None

        if not isinstance(profile, CandidateProfile) or profile.error:
            logger.warning("External parser returned no usable profile, falling back to rule-based parser")
            return None

        logger.info(f"Resume parsed by external parser ({profile.parser_version})")
        return profile

    def _parse_with_rules(self, raw_text: str) -> CandidateProfile:
        sections = split_sections(raw_text)

        profile = CandidateProfile(
            name=extract_name(raw_text, sections),
            email=extract_email(raw_text),
            phone=extract_phone(raw_text),
            skills=extract_skills(raw_text, sections),
            education=extract_education(raw_text, sections),
            experience_years=extract_experience_years(raw_text, sections),
            raw_text=raw_text,
            sections_detected=detected_sections(sections),
            parser_version=PARSER_VERSIONS["rules"],
            summary=extract_summary(sections),
            certifications=extract_certifications(sections),
        )

        logger.info(
            f"Resume parsed: {len(profile.skills)} skills, "
            f"{profile.experience_years} years exp, "
            f"education {[e.value for e in profile.education]}, "
            f"sections {profile.sections_detected}"
        )
        return profile


def parse_resume(
    document_text: str,
    use_external_oracle: bool = False,
    oracle: Optional[ProfileOracle] = None,
) -> CandidateProfile:
    """
    Parse resume text into a CandidateProfile.

    Short or empty text yields a profile whose ``error`` is set instead of
    raising. The oracle is only consulted when ``use_external_oracle`` is set.
    """
    return ResumeParser(oracle).parse(document_text, use_external_oracle=use_external_oracle)


def parse_resume_document(
    data: bytes,
    extractor: TextExtractor = decode_text_document,
    use_external_oracle: bool = False,
    oracle: Optional[ProfileOracle] = None,
) -> CandidateProfile:
    """Extract text from document bytes, then parse it. Extraction failures become an error profile."""
    try:
        text = extractor(data)
    except TextExtractionError as e:
        logger.error(f"Text extraction failed: {e}")
        return CandidateProfile(error=f"text extraction failed: {e}")

    return parse_resume(text, use_external_oracle=use_external_oracle, oracle=oracle)
