"""
Example usage of the resume parsing and ATS scoring engine.

Run this file to see the system in action:
    python -m ats_engine.example_usage

Set OPENAI_API_KEY and USE_LLM_PARSER=1 to try the LLM parser first.
"""

import logging

from ats_engine import JobRequirement, evaluate_candidate, rank_candidates
from ats_engine.config import get_settings
from ats_engine.llm_extractor import build_llm_oracle

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

JOB = JobRequirement(
    title="Backend Engineer",
    description="""
We are hiring a Backend Engineer to build our payments platform.

Requirements:
- Strong Python and Django skills
- Experience designing REST APIs backed by PostgreSQL
- Docker in production

Nice to have: Kubernetes, AWS
""",
    required_skills=["Python", "SQL"],
    min_experience=3,
    education_level="bachelors",
)

RESUME = """
Priya Raman
priya.raman@example.com | +1 415-555-0199

SUMMARY
Backend engineer with 5 years of experience building Python services.

EXPERIENCE
Senior Backend Engineer | Finlytics | 2021 - present
- Built REST APIs with Django and FastAPI on PostgreSQL
- Moved deployments to Docker and Kubernetes on AWS

Software Engineer | ShopCo | 2019 - 2021
- Maintained Node.js microservices

EDUCATION
B.Tech in Computer Science, 2019

SKILLS
Python, Django, FastAPI, PostgreSQL, Docker, Kubernetes, Git

CERTIFICATIONS
- AWS Certified Developer - Associate
"""

JUNIOR_RESUME = """
Sam Lee
sam.lee@example.com

EDUCATION
Diploma in Web Development

SKILLS
HTML, CSS, JavaScript, React
"""


def example_single_candidate(use_llm: bool, oracle):
    """Example 1: Parse and score one resume."""
    print("\n" + "="*80)
    print("EXAMPLE 1: Single Candidate")
    print("="*80)

    result = evaluate_candidate(RESUME, JOB, use_external_oracle=use_llm, oracle=oracle)
    profile, score = result.profile, result.score

    print(f"\nCandidate: {profile.name} <{profile.email}> ({profile.parser_version})")
    print(f"  Skills: {', '.join(profile.skills)}")
    print(f"  Experience: {profile.experience_years} years")
    print(f"  Education: {', '.join(e.value for e in profile.education) or 'none'}")

    print(f"\nATS Score: {score.total_score}/{score.max_score}")
    for name, dimension in score.breakdown.items():
        bar = "█" * int(dimension.score / dimension.max * 20)
        print(f"  {name:20} {dimension.score:6.2f}/{dimension.max:<5g} {bar}")

    print("\nExplanation:")
    for line in score.explanation:
        print(f"  - {line}")

    print(f"{'='*80}\n")


def example_ranking(use_llm: bool, oracle):
    """Example 2: Rank several resumes for one job."""
    print("\n" + "="*80)
    print("EXAMPLE 2: Candidate Ranking")
    print("="*80)

    results = rank_candidates([JUNIOR_RESUME, RESUME, "too short"], JOB, use_external_oracle=use_llm, oracle=oracle)

    for i, result in enumerate(results, 1):
        label = result.profile.name or result.profile.error
        print(f"#{i} - candidate {result.candidate_index} ({label}): {result.score.total_score}")

    print(f"{'='*80}\n")


def main():
    """Run all examples."""
    settings = get_settings()
    oracle = None
    if settings.use_llm_parser:
        oracle = build_llm_oracle(settings)

    print("\n" + "="*80)
    print("RESUME PARSING & ATS SCORING - EXAMPLES")
    print("="*80)

    example_single_candidate(settings.use_llm_parser, oracle)
    example_ranking(settings.use_llm_parser, oracle)


if __name__ == "__main__":
    main()
