"""
Integration tests for the HTTP API.
"""

import unittest
import logging
from unittest import mock

from fastapi.testclient import TestClient

from app import _build_oracle, app, get_oracle
from ats_engine.config import get_settings
from ats_engine.models import Settings

# Configure logging for tests
logging.basicConfig(level=logging.INFO)


JOB = {
    "title": "Backend Engineer",
    "description": "",
    "required_skills": ["Node.js", "SQL"],
    "min_experience": 3,
    "education_level": "bachelors",
}

PROFILE = {
    "skills": ["node.js", "postgresql"],
    "experience_years": 3,
    "education": ["bachelors"],
    "raw_text": "Experienced backend engineer shipping node.js services",
}

RESUME = """Jane Doe
jane.doe@example.com

Experience
Backend Engineer, Acme, 2016 - 2020

Skills
Node.js, PostgreSQL
"""


class TestAPI(unittest.TestCase):
    """Test the FastAPI endpoints without an LLM oracle."""

    def setUp(self):
        app.dependency_overrides[get_oracle] = lambda: None
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_root(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")

    def test_parse_resume(self):
        response = self.client.post("/api/parse-resume", json={"text": RESUME})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["name"], "Jane Doe")
        self.assertEqual(body["experience_years"], 4)
        self.assertIn("node.js", body["skills"])
        self.assertEqual(body["experience_detail"], [])

    def test_parse_short_resume(self):
        response = self.client.post("/api/parse-resume", json={"text": "hi"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["error"], "insufficient data")

    def test_ats_score(self):
        response = self.client.post("/api/ats-score", json={"profile": PROFILE, "job": JOB})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertAlmostEqual(body["total_score"], 77.75, places=2)
        self.assertEqual(body["breakdown"]["skills"]["missing_skills"], ["sql"])
        self.assertEqual(len(body["explanation"]), 4)

    def test_ats_score_rejects_bad_payload(self):
        response = self.client.post("/api/ats-score", json={"profile": {"experience_years": -1}, "job": JOB})
        self.assertEqual(response.status_code, 422)

    def test_evaluate(self):
        response = self.client.post("/api/evaluate", json={"resume_text": RESUME, "job": JOB})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["profile"]["email"], "jane.doe@example.com")
        self.assertTrue(body["score"]["sufficient_data"])


class TestOracleConstruction(unittest.TestCase):
    """Test that a broken LLM parser setup never breaks requests."""

    def setUp(self):
        _build_oracle.cache_clear()
        app.dependency_overrides[get_settings] = lambda: Settings(use_llm_parser=True, openai_api_key="sk-test")
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        _build_oracle.cache_clear()

    def test_construction_failure_falls_back_to_rules(self):
        with mock.patch("app.build_llm_oracle", side_effect=RuntimeError("unknown model")):
            response = self.client.post("/api/parse-resume", json={"text": RESUME, "use_external_oracle": True})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["parser_version"], "rules-v1")
        self.assertEqual(body["name"], "Jane Doe")

    def test_construction_failure_does_not_break_scoring(self):
        with mock.patch("app.build_llm_oracle", side_effect=RuntimeError("unknown model")):
            response = self.client.post("/api/evaluate", json={"resume_text": RESUME, "job": JOB})

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["score"]["sufficient_data"])


if __name__ == "__main__":
    unittest.main()
