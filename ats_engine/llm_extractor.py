"""
LLM Extraction Module

Optional external oracle: uses PhiData + OpenAI to turn resume text into a
CandidateProfile. The resume parser only sees the ``parse(text)`` method and
falls back to rule-based parsing whenever this returns nothing or fails.
"""

import json
import re
import logging
from typing import Dict, Any, List, Optional

from phi.agent import Agent
from phi.model.openai import OpenAIChat

from .config import LLM_CONFIG, PARSER_VERSIONS
from .models import CandidateProfile, EducationLevel, ExperienceEntry, Settings
from .skill_resolver import canonicalize_all

logger = logging.getLogger(__name__)

_DEGREE_ALIASES = {
    "phd": EducationLevel.PHD,
    "ph.d": EducationLevel.PHD,
    "doctorate": EducationLevel.PHD,
    "masters": EducationLevel.MASTERS,
    "master": EducationLevel.MASTERS,
    "bachelors": EducationLevel.BACHELORS,
    "bachelor": EducationLevel.BACHELORS,
    "diploma": EducationLevel.DIPLOMA,
    "associate": EducationLevel.DIPLOMA,
}


def get_model_config(model_name: str, temperature: float = 0, timeout: Optional[float] = None) -> Dict[str, Any]:
    """
    Get model configuration with temperature support check.
    Some models don't support custom temperature.
    """
    config = {"id": model_name, "max_retries": LLM_CONFIG["max_retries"]}

    # Models that don't support temperature customization
    models_without_temperature = ["o1", "o1-mini", "o1-preview", "gpt-5-mini", "gpt-5"]

    model_lower = model_name.lower()
    supports_temperature = not any(no_temp in model_lower for no_temp in models_without_temperature)

    if supports_temperature:
        config["temperature"] = temperature

    # JSON mode support
    if "gpt-4" in model_lower:
        config["response_format"] = {"type": "json_object"}

    if timeout:
        config["timeout"] = timeout

    return config


def extract_json_from_response(text: str) -> Optional[Dict[str, Any]]:
    """Extract JSON from LLM response, handling markdown and other formatting."""
    if not text:
        return None

    # Remove markdown code fences
    if '```json' in text:
        match = re.search(r'```json\s*\n?(.*?)\n?```', text, re.DOTALL)
        if match:
            text = match.group(1).strip()
    elif '```' in text:
        match = re.search(r'```\s*\n?(.*?)\n?```', text, re.DOTALL)
        if match:
            text = match.group(1).strip()

    # Outermost object
    json_match = re.search(r'\{.*\}', text, re.DOTALL)
    if json_match:
        try:
            return json.loads(json_match.group(0))
        except json.JSONDecodeError:
            pass

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def normalize_education(entries: Any) -> List[EducationLevel]:
    """Map LLM education entries (objects or plain strings) onto EducationLevel."""
    if not isinstance(entries, list):
        return []
    levels = []
    for entry in entries:
        degree = entry.get("degree") if isinstance(entry, dict) else entry
        level = _DEGREE_ALIASES.get(str(degree or "").strip().lower())
        if level is not None and level not in levels:
            levels.append(level)
    return levels


def _as_years(value: Any) -> int:
    try:
        return max(0, int(float(value)))
    except (TypeError, ValueError):
        return 0


def _as_year(value: Any) -> Optional[int]:
    try:
        year = int(float(value))
    except (TypeError, ValueError):
        return None
    return year if 1900 <= year <= 2100 else None


def _as_text(value: Any) -> Optional[str]:
    return (value.strip() or None) if isinstance(value, str) else None


def normalize_experience(entries: Any) -> List[ExperienceEntry]:
    """Map LLM work-history objects onto ExperienceEntry; "present" end years become None."""
    if not isinstance(entries, list):
        return []
    return [
        ExperienceEntry(
            title=_as_text(entry.get("title")),
            company=_as_text(entry.get("company")),
            start_year=_as_year(entry.get("start_year")),
            end_year=_as_year(entry.get("end_year")),
            description=_as_text(entry.get("description")),
        )
        for entry in entries
        if isinstance(entry, dict)
    ]


def profile_from_llm_data(data: Dict[str, Any], raw_text: str) -> CandidateProfile:
    """Normalize an LLM payload into the rule-based profile shape."""
    skills = [s for s in (data.get("skills") or []) if isinstance(s, str)]
    certifications = [c for c in (data.get("certifications") or []) if isinstance(c, str) and c.strip()]

    return CandidateProfile(
        name=data.get("name") or None,
        email=data.get("email") or None,
        phone=data.get("phone") or None,
        skills=canonicalize_all(skills),
        education=normalize_education(data.get("education")),
        experience_years=_as_years(data.get("experience_years")),
        raw_text=raw_text,
        sections_detected=[],
        parser_version=PARSER_VERSIONS["llm"],
        summary=data.get("summary") or None,
        certifications=certifications,
        experience_detail=normalize_experience(data.get("experience")),
    )


def build_resume_parser_agent(model_name: str = None, api_key: str = None, timeout: float = None) -> Agent:
    """Build PhiData agent for resume extraction."""
    model_name = model_name or LLM_CONFIG["model"]
    model_config = get_model_config(model_name, temperature=LLM_CONFIG["temperature"], timeout=timeout)
    if api_key:
        model_config["api_key"] = api_key

    return Agent(
        name="Resume Parser",
        role="Extract structured candidate data from resume text",
        model=OpenAIChat(**model_config),
        instructions=[
            "Extract information in JSON format with no additional text or markdown.",
            "Return ONLY a valid JSON object with these keys:",
            "- name: full name of the candidate (null if unknown)",
            "- email: email address (null if unknown)",
            "- phone: phone number (null if unknown)",
            "- skills: array of ALL technical and soft skills, canonical names (React not ReactJS, Node.js not NodeJS)",
            "- education: array of objects {degree, field, institution, year}; degree is one of diploma/bachelors/masters/phd",
            "- experience_years: number, total professional years from work history (0 if unknown)",
            "- experience: array of objects {title, company, start_year, end_year, description}; end_year null if current",
            "- summary: 2-3 sentence professional summary",
            "- certifications: array of certification names",
            "",
            "If a field cannot be determined, use null for strings, [] for arrays and 0 for numbers.",
            "CRITICAL: Return ONLY the JSON object, no explanations.",
        ],
        show_tool_calls=False,
        markdown=False,
    )


class LLMProfileOracle:
    """Single-shot LLM resume parser. No retries: the caller falls back on failure."""

    def __init__(self, model_name: str = None, api_key: str = None, timeout: float = None, agent: Agent = None):
        self.model_name = model_name or LLM_CONFIG["model"]
        self.agent = agent or build_resume_parser_agent(self.model_name, api_key=api_key, timeout=timeout)

    def parse(self, text: str) -> Optional[CandidateProfile]:
        """
        Parse resume text with the LLM.

        Returns:
            CandidateProfile tagged with the LLM parser version

        Raises:
            ValueError: If the response holds no usable JSON object
        """
        logger.info(f"LLM resume parsing started ({len(text)} chars, model {self.model_name})")

        response = self.agent.run(f"Resume text:\n{text}")

        # Extract text from response
        if hasattr(response, 'content'):
            response_text = str(response.content)
        elif hasattr(response, 'messages') and response.messages:
            last_msg = response.messages[-1]
            response_text = str(last_msg.content if hasattr(last_msg, 'content') else last_msg)
        else:
            response_text = str(response)

        logger.debug(f"Raw LLM response: {response_text[:500]}...")

        data = extract_json_from_response(response_text)
        if not data:
            raise ValueError("Could not extract valid JSON from LLM response")

        profile = profile_from_llm_data(data, text)
        logger.info(f"LLM parsing complete: {len(profile.skills)} skills, {profile.experience_years} years")
        return profile


def build_llm_oracle(settings: Settings) -> Optional[LLMProfileOracle]:
    """Oracle selected by configuration; None when no API key is configured."""
    if not settings.openai_api_key:
        logger.info("No OPENAI_API_KEY configured, LLM parsing disabled")
        return None
    return LLMProfileOracle(
        model_name=settings.model_name,
        api_key=settings.openai_api_key,
        timeout=settings.llm_timeout_seconds,
    )
