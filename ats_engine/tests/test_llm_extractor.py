"""
Unit tests for the LLM oracle helpers. No network calls: the agent is faked.
"""

import os
import unittest
import logging
from unittest import mock

from ats_engine.config import get_settings
from ats_engine.llm_extractor import (
    LLMProfileOracle,
    build_llm_oracle,
    extract_json_from_response,
    get_model_config,
    normalize_education,
    normalize_experience,
    profile_from_llm_data,
)
from ats_engine.models import EducationLevel, Settings
from ats_engine.resume_parser import ResumeParser

# Configure logging for tests
logging.basicConfig(level=logging.INFO)


LLM_RESPONSE = """```json
{
  "name": "Ann Lee",
  "email": "ann@example.com",
  "phone": null,
  "skills": ["ReactJS", "Node.JS", "react", 42],
  "education": [{"degree": "Master", "field": "CS"}, {"degree": "bachelor"}],
  "experience_years": "4.5",
  "experience": [
    {"title": "Senior Engineer", "company": "Globex", "start_year": 2021, "end_year": "Present"},
    {"title": "Engineer", "company": "Initech", "start_year": "2019", "end_year": 2021, "description": "APIs"}
  ],
  "summary": "Full-stack engineer.",
  "certifications": ["CKA", ""]
}
```"""

RESUME_TEXT = "Ann Lee\nann@example.com\nSkills\nReact, Node.js\n"


class FakeResponse:
    def __init__(self, content):
        self.content = content


class FakeAgent:
    """Stands in for a phi Agent."""

    def __init__(self, content):
        self.content = content
        self.prompts = []

    def run(self, prompt):
        self.prompts.append(prompt)
        return FakeResponse(self.content)


class TestJsonHelpers(unittest.TestCase):
    """Test response cleanup and normalization."""

    def test_fenced_json(self):
        data = extract_json_from_response(LLM_RESPONSE)
        self.assertEqual(data["name"], "Ann Lee")

    def test_json_with_chatter(self):
        data = extract_json_from_response('Sure! Here it is: {"name": "Bo"} Hope that helps.')
        self.assertEqual(data, {"name": "Bo"})

    def test_no_json(self):
        self.assertIsNone(extract_json_from_response("I cannot help with that."))
        self.assertIsNone(extract_json_from_response(""))
        self.assertIsNone(extract_json_from_response("[1, 2, 3]"))

    def test_normalize_education(self):
        entries = [{"degree": "PhD"}, "masters", {"degree": "Masters"}, {"degree": "basket weaving"}, None]
        self.assertEqual(normalize_education(entries), [EducationLevel.PHD, EducationLevel.MASTERS])
        self.assertEqual(normalize_education("phd"), [])

    def test_profile_from_llm_data(self):
        profile = profile_from_llm_data(extract_json_from_response(LLM_RESPONSE), RESUME_TEXT)

        self.assertEqual(profile.name, "Ann Lee")
        self.assertIsNone(profile.phone)
        self.assertEqual(profile.skills, ["react", "node.js"])
        self.assertEqual(profile.education, [EducationLevel.MASTERS, EducationLevel.BACHELORS])
        self.assertEqual(profile.experience_years, 4)
        self.assertEqual(profile.certifications, ["CKA"])
        self.assertEqual(profile.parser_version, "llm-v1")
        self.assertEqual(profile.raw_text, RESUME_TEXT)
        self.assertEqual([e.company for e in profile.experience_detail], ["Globex", "Initech"])

    def test_bad_experience_value(self):
        profile = profile_from_llm_data({"experience_years": "lots"}, RESUME_TEXT)
        self.assertEqual(profile.experience_years, 0)
        self.assertEqual(profile.experience_detail, [])

    def test_normalize_experience(self):
        entries = normalize_experience([
            {"title": " Engineer ", "company": "Acme", "start_year": "2019", "end_year": "Present"},
            "Worked at Initech",
            {"title": "", "start_year": 12, "end_year": 2021.0, "description": 7},
        ])

        self.assertEqual(len(entries), 2)
        self.assertEqual(entries[0].title, "Engineer")
        self.assertEqual(entries[0].start_year, 2019)
        self.assertIsNone(entries[0].end_year)
        self.assertIsNone(entries[1].title)
        self.assertIsNone(entries[1].start_year)
        self.assertEqual(entries[1].end_year, 2021)
        self.assertIsNone(entries[1].description)
        self.assertEqual(normalize_experience("ten years"), [])


class TestModelConfig(unittest.TestCase):
    """Test per-model OpenAI settings."""

    def test_gpt4_config(self):
        config = get_model_config("gpt-4o", temperature=0, timeout=12)
        self.assertEqual(config["temperature"], 0)
        self.assertEqual(config["response_format"], {"type": "json_object"})
        self.assertEqual(config["max_retries"], 0)
        self.assertEqual(config["timeout"], 12)

    def test_model_without_temperature(self):
        config = get_model_config("o1-mini")
        self.assertNotIn("temperature", config)
        self.assertNotIn("timeout", config)


class TestLLMProfileOracle(unittest.TestCase):
    """Test the oracle with a fake agent."""

    def test_parse(self):
        agent = FakeAgent(LLM_RESPONSE)
        profile = LLMProfileOracle(agent=agent).parse(RESUME_TEXT)

        self.assertEqual(len(agent.prompts), 1)
        self.assertIn(RESUME_TEXT, agent.prompts[0])
        self.assertEqual(profile.email, "ann@example.com")

    def test_unusable_response_raises(self):
        with self.assertRaises(ValueError):
            LLMProfileOracle(agent=FakeAgent("no json here")).parse(RESUME_TEXT)

    def test_parser_falls_back_on_unusable_response(self):
        parser = ResumeParser(LLMProfileOracle(agent=FakeAgent("no json here")))
        profile = parser.parse(RESUME_TEXT, use_external_oracle=True)
        self.assertEqual(profile.parser_version, "rules-v1")
        self.assertEqual(profile.email, "ann@example.com")

    def test_parser_uses_oracle_profile(self):
        parser = ResumeParser(LLMProfileOracle(agent=FakeAgent(LLM_RESPONSE)))
        profile = parser.parse(RESUME_TEXT, use_external_oracle=True)
        self.assertEqual(profile.parser_version, "llm-v1")

    def test_no_api_key_means_no_oracle(self):
        self.assertIsNone(build_llm_oracle(Settings()))


class TestSettings(unittest.TestCase):
    """Test runtime settings from the environment."""

    def test_settings_from_environment(self):
        env = {
            "OPENAI_API_KEY": "sk-test",
            "OPENAI_MODEL": "gpt-4o-mini",
            "USE_LLM_PARSER": "yes",
            "LLM_TIMEOUT_SECONDS": "5",
            "LOG_LEVEL": "debug",
        }
        with mock.patch.dict(os.environ, env):
            settings = get_settings()

        self.assertEqual(settings.openai_api_key, "sk-test")
        self.assertEqual(settings.model_name, "gpt-4o-mini")
        self.assertTrue(settings.use_llm_parser)
        self.assertEqual(settings.llm_timeout_seconds, 5.0)
        self.assertEqual(settings.log_level, "DEBUG")

    def test_parser_flag_off(self):
        with mock.patch.dict(os.environ, {"USE_LLM_PARSER": "0"}):
            self.assertFalse(get_settings().use_llm_parser)


if __name__ == "__main__":
    unittest.main()
