"""
Unit tests for section splitting and field extraction.
"""

import unittest
import logging

from ats_engine.extractors import (
    extract_certifications,
    extract_education,
    extract_email,
    extract_experience_years,
    extract_name,
    extract_phone,
    extract_skills,
    extract_summary,
    tokenize_skills_section,
)
from ats_engine.models import EducationLevel
from ats_engine.sections import detect_header, detected_sections, split_sections

# Configure logging for tests
logging.basicConfig(level=logging.INFO)


SAMPLE_RESUME = """Jane Doe
jane.doe@example.com | (555) 123-4567

Professional Summary
Backend engineer focused on APIs.

WORK EXPERIENCE
Backend Engineer, Acme Corp, 2018 - 2021
Senior Backend Engineer, Globex, 2021 - Present

Education:
B.S. in Computer Science

Technical Skills
- Python, Django | PostgreSQL
• Docker
Languages: Go, Rust

Projects
Payment gateway in Go

Certifications
- AWS Certified Solutions Architect
"""


class TestSectionSplitter(unittest.TestCase):
    """Test header detection and section splitting."""

    def test_detects_header_variants(self):
        self.assertEqual(detect_header("WORK EXPERIENCE"), "experience")
        self.assertEqual(detect_header("  Education:  "), "education")
        self.assertEqual(detect_header("## Technical Skills"), "skills")
        self.assertEqual(detect_header("Professional Summary"), "summary")
        self.assertEqual(detect_header("Licenses & Certifications"), "certifications")

    def test_ordinary_lines_are_not_headers(self):
        self.assertIsNone(detect_header("Experience with Python and Go"))
        self.assertIsNone(detect_header(""))

    def test_long_lines_are_not_headers(self):
        line = "=" * 30 + " Experience " + "=" * 30
        self.assertIsNone(detect_header(line))

    def test_split_sample_resume(self):
        sections = split_sections(SAMPLE_RESUME)

        self.assertEqual(sections["header"], "Jane Doe\njane.doe@example.com | (555) 123-4567")
        self.assertEqual(sections["summary"], "Backend engineer focused on APIs.")
        self.assertEqual(sections["education"], "B.S. in Computer Science")
        self.assertIn("Globex", sections["experience"])
        self.assertEqual(sections["full_text"], SAMPLE_RESUME)
        self.assertEqual(
            detected_sections(sections),
            ["summary", "experience", "education", "skills", "projects", "certifications"],
        )

    def test_repeated_header_appends(self):
        sections = split_sections("Skills\nPython\nExperience\nAcme\nSkills\nDocker")
        self.assertEqual(sections["skills"], "Python\nDocker")

    def test_text_without_headers(self):
        sections = split_sections("Just a plain paragraph of text")
        self.assertEqual(sections["header"], "Just a plain paragraph of text")
        self.assertEqual(detected_sections(sections), [])

    def test_deterministic(self):
        self.assertEqual(split_sections(SAMPLE_RESUME), split_sections(SAMPLE_RESUME))


class TestContactExtraction(unittest.TestCase):
    """Test name, email and phone extraction."""

    def test_email_and_phone(self):
        self.assertEqual(extract_email(SAMPLE_RESUME), "jane.doe@example.com")
        self.assertEqual(extract_phone(SAMPLE_RESUME), "(555) 123-4567")

    def test_missing_contact_fields(self):
        self.assertIsNone(extract_email("no address here"))
        self.assertIsNone(extract_phone("call me maybe"))

    def test_name_from_header(self):
        self.assertEqual(extract_name(SAMPLE_RESUME, split_sections(SAMPLE_RESUME)), "Jane Doe")

    def test_name_before_email(self):
        text = "SUMMARY\nSeasoned data engineer.\nJohn Smith\njohn.smith@mail.com\n"
        self.assertEqual(extract_name(text, split_sections(text)), "John Smith")

    def test_name_from_loose_first_line(self):
        text = "Madonna\n555 123 4567\nSkills\nSinging"
        self.assertEqual(extract_name(text, split_sections(text)), "Madonna")

    def test_no_name(self):
        text = "#1 ranked seller\n\nSkills\nExcel"
        self.assertIsNone(extract_name(text, split_sections(text)))


class TestSkillExtraction(unittest.TestCase):
    """Test the keyword scan and skills-section tokenizer."""

    def test_tokenizer(self):
        tokens = tokenize_skills_section("- Python, Django | PostgreSQL\n• Docker\nLanguages: Go, Rust\n2019")
        self.assertEqual(tokens, ["Python", "Django", "PostgreSQL", "Docker", "Go", "Rust"])

    def test_parenthesised_tokens(self):
        tokens = tokenize_skills_section("Cloud (AWS, GCP)")
        self.assertEqual(tokens, ["Cloud", "AWS", "GCP"])

    def test_sample_resume_skills(self):
        skills = extract_skills(SAMPLE_RESUME, split_sections(SAMPLE_RESUME))
        self.assertEqual(set(skills), {"python", "go", "rust", "django", "postgresql", "docker", "aws"})
        self.assertEqual(len(skills), len(set(skills)))

    def test_unknown_section_tokens_are_kept(self):
        text = "Skills\nQuantum Basket Weaving, ReactJS"
        skills = extract_skills(text, split_sections(text))
        self.assertIn("quantum basket weaving", skills)
        self.assertIn("react", skills)

    def test_whole_word_scan(self):
        text = "Senior JavaScript developer"
        skills = extract_skills(text, split_sections(text))
        self.assertIn("javascript", skills)
        self.assertNotIn("java", skills)


class TestEducationExtraction(unittest.TestCase):
    """Test degree detection."""

    def test_sample_resume(self):
        self.assertEqual(extract_education(SAMPLE_RESUME, split_sections(SAMPLE_RESUME)), [EducationLevel.BACHELORS])

    def test_multiple_levels_highest_first(self):
        self.assertEqual(
            extract_education("PhD in Physics, M.Sc. in Mathematics", {}),
            [EducationLevel.PHD, EducationLevel.MASTERS],
        )

    def test_mba(self):
        self.assertEqual(extract_education("MBA, 2015", {}), [EducationLevel.MASTERS])

    def test_lowercase_words_are_not_degrees(self):
        self.assertEqual(extract_education("projects to be completed, ms teams", {}), [])

    def test_education_section_preferred(self):
        sections = {"education": "Diploma in Design"}
        self.assertEqual(extract_education("PhD candidate mentor. Diploma in Design", sections), [EducationLevel.DIPLOMA])


class TestExperienceExtraction(unittest.TestCase):
    """Test the experience-years rule chain."""

    def test_explicit_phrase_wins(self):
        text = "Seasoned developer with 7+ years of experience in Python. 2010 - 2012"
        self.assertEqual(extract_experience_years(text, {}, current_year=2025), 7)

    def test_experience_label(self):
        self.assertEqual(extract_experience_years("Experience: 4 years", {}, current_year=2025), 4)

    def test_decimal_years_floor(self):
        self.assertEqual(extract_experience_years("1.5 years of experience", {}, current_year=2025), 1)

    def test_ranges_from_experience_section(self):
        text = (
            "Jane Roe\n"
            "EDUCATION\n"
            "University of Somewhere 2000 - 2004\n"
            "EXPERIENCE\n"
            "Acme 2015 - 2018\n"
            "Globex 2018 – present\n"
        )
        self.assertEqual(extract_experience_years(text, split_sections(text), current_year=2025), 10)

    def test_ranges_from_whole_text(self):
        self.assertEqual(extract_experience_years("Worked at Acme 2019-2021", {}, current_year=2025), 2)

    def test_range_with_month(self):
        self.assertEqual(extract_experience_years("Acme, 2016 to Mar 2020", {}, current_year=2025), 4)

    def test_since_year(self):
        self.assertEqual(extract_experience_years("Freelance developer since 2019", {}, current_year=2025), 6)

    def test_no_signal(self):
        self.assertEqual(extract_experience_years("Enthusiastic learner", {}, current_year=2025), 0)

    def test_sample_resume(self):
        sections = split_sections(SAMPLE_RESUME)
        self.assertEqual(extract_experience_years(SAMPLE_RESUME, sections, current_year=2025), 3 + 4)


class TestSummaryAndCertifications(unittest.TestCase):
    """Test the supplementary fields."""

    def test_summary(self):
        self.assertEqual(extract_summary(split_sections(SAMPLE_RESUME)), "Backend engineer focused on APIs.")
        self.assertIsNone(extract_summary({}))

    def test_summary_first_paragraph_only(self):
        sections = {"summary": "Builds   things\nat scale.\n\nSecond paragraph."}
        self.assertEqual(extract_summary(sections), "Builds things at scale.")

    def test_certifications(self):
        self.assertEqual(
            extract_certifications(split_sections(SAMPLE_RESUME)),
            ["AWS Certified Solutions Architect"],
        )
        self.assertEqual(extract_certifications({"certifications": "- \n• CKA\n"}), ["CKA"])


if __name__ == "__main__":
    unittest.main()
