"""
Main Matcher Module

Orchestrates the complete evaluation of a candidate:
1. Parse the resume into a CandidateProfile (rule-based, or the oracle first)
2. Calculate the deterministic ATS score
3. Return profile and score together
"""

import logging
from typing import List, Optional

from .models import CandidateEvaluation, CandidateProfile, JobRequirement
from .resume_parser import ProfileOracle, ResumeParser
from .scoring_engine import calculate_ats_score, insufficient_data_score

logger = logging.getLogger(__name__)


def evaluate_candidate(
    resume_text: str,
    job: JobRequirement,
    use_external_oracle: bool = False,
    oracle: Optional[ProfileOracle] = None,
) -> CandidateEvaluation:
    """
    Parse a resume and score it against a job.

    Args:
        resume_text: Resume text already extracted from the document
        job: Job requirement record
        use_external_oracle: Try the oracle before rule-based parsing
        oracle: Optional external parser (e.g. LLMProfileOracle)

    Returns:
        CandidateEvaluation with the parsed profile and its ScoreBreakdown

    Raises:
        ValueError: If parsing or scoring fails unexpectedly

    Example:
        >>> result = evaluate_candidate(resume_text, job)
        >>> print(f"ATS score: {result.score.total_score}")
    """
    logger.info("=" * 80)
    logger.info("STARTING CANDIDATE EVALUATION")
    logger.info("=" * 80)

    try:
        profile = ResumeParser(oracle).parse(resume_text, use_external_oracle=use_external_oracle)
        if profile.error:
            logger.warning(f"Resume could not be parsed: {profile.error}")

        score = calculate_ats_score(profile, job)

        logger.info("=" * 80)
        logger.info(f"EVALUATION COMPLETE - Score: {score.total_score}")
        logger.info("=" * 80)

        return CandidateEvaluation(profile=profile, score=score)

    except Exception as e:
        logger.error(f"Evaluation failed: {e}", exc_info=True)
        raise ValueError(f"Candidate evaluation failed: {e}") from e


def rank_candidates(
    resume_texts: List[str],
    job: JobRequirement,
    use_external_oracle: bool = False,
    oracle: Optional[ProfileOracle] = None,
) -> List[CandidateEvaluation]:
    """
    Evaluate several resumes against one job.

    Returns:
        Evaluations sorted by total_score (highest first); equal scores keep
        input order. ``candidate_index`` is the 0-based input position. A
        resume that fails to evaluate is kept with its error and a 0 score.
    """
    logger.info(f"Ranking {len(resume_texts)} candidates for '{job.title}'")

    results = []
    for i, text in enumerate(resume_texts):
        try:
            evaluation = evaluate_candidate(text, job, use_external_oracle=use_external_oracle, oracle=oracle)
            results.append(evaluation.model_copy(update={"candidate_index": i}))
        except ValueError as e:
            logger.error(f"Failed to evaluate candidate {i}: {e}")
            results.append(
                CandidateEvaluation(
                    profile=CandidateProfile(error=str(e)),
                    score=insufficient_data_score(),
                    candidate_index=i,
                )
            )

    results.sort(key=lambda r: r.score.total_score, reverse=True)

    if results:
        logger.info(f"Top candidate: #{results[0].candidate_index} with {results[0].score.total_score}")

    return results
