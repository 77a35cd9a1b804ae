from __future__ import annotations

from enum import Enum
from typing import Annotated, Dict, FrozenSet, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, validator

from .config import EDUCATION_RANK, MATCH_SCORES, PARSER_VERSIONS


class Settings(BaseModel):
    model_config = ConfigDict(protected_namespaces=())
    openai_api_key: Optional[str] = None
    model_name: str = "gpt-4o"
    use_llm_parser: bool = False
    llm_timeout_seconds: float = 30
    log_level: str = "INFO"


class SkillCategory(str, Enum):
    PROGRAMMING_LANGUAGES = "programming_languages"
    FRONTEND = "frontend"
    BACKEND = "backend"
    DATABASES = "databases"
    DEVOPS = "devops"
    CLOUD = "cloud"
    DATA_SCIENCE = "data_science"
    APIS = "apis"
    MOBILE = "mobile"
    TESTING = "testing"
    SOFT_SKILLS = "soft_skills"


class EducationLevel(str, Enum):
    """Degree levels, ordered by rank (diploma < bachelors < masters < phd)."""

    DIPLOMA = "diploma"
    BACHELORS = "bachelors"
    MASTERS = "masters"
    PHD = "phd"

    @property
    def rank(self) -> int:
        return EDUCATION_RANK[self.value]

    def __lt__(self, other):
        if isinstance(other, EducationLevel):
            return self.rank < other.rank
        return NotImplemented

    def __le__(self, other):
        if isinstance(other, EducationLevel):
            return self.rank <= other.rank
        return NotImplemented

    def __gt__(self, other):
        if isinstance(other, EducationLevel):
            return self.rank > other.rank
        return NotImplemented

    def __ge__(self, other):
        if isinstance(other, EducationLevel):
            return self.rank >= other.rank
        return NotImplemented


class MatchKind(str, Enum):
    """Tier of the partial-credit ladder used for a required skill."""

    EXACT = "exact"
    FUZZY = "fuzzy"
    CATEGORY = "category"
    NONE = "none"

    @property
    def weight(self) -> float:
        return MATCH_SCORES[self.value]


class SkillGroup(BaseModel):
    model_config = ConfigDict(frozen=True)
    canonical: str
    variants: FrozenSet[str] = Field(default_factory=frozenset)
    category: Optional[SkillCategory] = None


class SkillMatch(BaseModel):
    model_config = ConfigDict(frozen=True)
    skill: str
    kind: MatchKind
    score: float
    matched: Optional[str] = None  # Candidate skill behind a fuzzy or category match


class JobSkills(BaseModel):
    model_config = ConfigDict(frozen=True)
    required: List[str] = Field(default_factory=list)
    nice_to_have: List[str] = Field(default_factory=list)


class ExperienceEntry(BaseModel):
    model_config = ConfigDict(frozen=True)
    title: Optional[str] = None
    company: Optional[str] = None
    start_year: Optional[int] = None
    end_year: Optional[int] = None
    description: Optional[str] = None


class CandidateProfile(BaseModel):
    model_config = ConfigDict(frozen=True)
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    education: List[EducationLevel] = Field(default_factory=list)
    experience_years: int = Field(default=0, ge=0)
    raw_text: str = ""
    sections_detected: List[str] = Field(default_factory=list)
    parser_version: str = PARSER_VERSIONS["rules"]
    summary: Optional[str] = None
    certifications: List[str] = Field(default_factory=list)
    experience_detail: List[ExperienceEntry] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def highest_education(self) -> Optional[EducationLevel]:
        return max(self.education) if self.education else None


class JobRequirement(BaseModel):
    title: str = ""
    description: str = ""
    required_skills: List[str] = Field(default_factory=list)
    min_experience: int = 0
    education_level: Optional[str] = None

    @validator("title", "description", pre=True)
    def none_to_empty(cls, v):
        return v or ""

    @validator("required_skills", pre=True)
    def clean_skills(cls, v):
        if not v:
            return []
        if isinstance(v, str):
            v = v.split(",")
        return [str(s).strip() for s in v if s and str(s).strip()]

    @validator("min_experience", pre=True)
    def clamp_experience(cls, v):
        if v is None:
            return 0
        return max(0, int(v))

    @validator("education_level", pre=True)
    def blank_education(cls, v):
        if v is None or not str(v).strip():
            return None
        return str(v).strip()


class DimensionScore(BaseModel):
    model_config = ConfigDict(frozen=True)
    score: float
    max: float
    detail: Optional[str] = None


class SkillsScore(DimensionScore):
    dimension: Literal["skills"] = "skills"
    required_score: float
    required_max: float
    nice_to_have_score: float
    nice_to_have_max: float
    required_skills: List[str] = Field(default_factory=list)
    matches: List[SkillMatch] = Field(default_factory=list)
    matched_skills: List[str] = Field(default_factory=list)
    missing_skills: List[str] = Field(default_factory=list)
    match_ratio: str = "0/0"
    nice_to_have_skills: List[str] = Field(default_factory=list)
    nice_to_have_matched: List[str] = Field(default_factory=list)
    nice_to_have_missing: List[str] = Field(default_factory=list)


class ExperienceScore(DimensionScore):
    dimension: Literal["experience"] = "experience"
    base_score: float
    bonus: float
    candidate_years: int
    required_years: int


class EducationScore(DimensionScore):
    dimension: Literal["education"] = "education"
    candidate_education: List[EducationLevel] = Field(default_factory=list)
    required_education: Optional[str] = None
    candidate_rank: int = 0
    required_rank: int = 0


class JobTitleScore(DimensionScore):
    dimension: Literal["job_title_relevance"] = "job_title_relevance"
    matched_keywords: List[str] = Field(default_factory=list)
    job_title_keywords: List[str] = Field(default_factory=list)


Dimension = Annotated[
    Union[SkillsScore, ExperienceScore, EducationScore, JobTitleScore],
    Field(discriminator="dimension"),
]


class ScoreBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)
    total_score: float = Field(ge=0.0, le=100.0)
    max_score: float = 100
    sufficient_data: bool
    breakdown: Dict[str, Dimension] = Field(default_factory=dict)
    explanation: List[str] = Field(default_factory=list)
    scoring_weights: Dict[str, int] = Field(default_factory=dict)


class ParseResumeRequest(BaseModel):
    text: str
    use_external_oracle: bool = False


class ATSScoreRequest(BaseModel):
    profile: CandidateProfile
    job: JobRequirement


class EvaluateCandidateRequest(BaseModel):
    resume_text: str
    job: JobRequirement
    use_external_oracle: bool = False


class CandidateEvaluation(BaseModel):
    model_config = ConfigDict(frozen=True)
    profile: CandidateProfile
    score: ScoreBreakdown
    candidate_index: Optional[int] = None
