"""
Pytest configuration and shared fakes for HTTP-backed services.
"""
from unittest.mock import MagicMock

import pytest
import requests

from skills_analyzer.models import AnalyzerConfig, Repository, SkillRecord
from skills_analyzer.services.catalog_service import SkillCatalog


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload=None, status_code=200, headers=None, json_error=False):
        self._payload = payload
        self.status_code = status_code
        self.headers = headers or {}
        self._json_error = json_error

    def json(self):
        if self._json_error:
            raise ValueError("invalid json")
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def session():
    fake = MagicMock()
    fake.headers = {}
    return fake


@pytest.fixture
def config():
    return AnalyzerConfig(github_username="octo", github_token="token-123")


@pytest.fixture
def catalog():
    skills = [
        SkillRecord(id="1", name="Python", category="Programming Languages"),
        SkillRecord(id="2", name="TypeScript"),
        SkillRecord(id="3", name="Javascript (Node)"),
        SkillRecord(id="4", name="Go"),
    ]
    return SkillCatalog(lambda: skills)


def make_repo(name, language=None, owner="octo", **kwargs):
    return Repository(
        name=name,
        owner=owner,
        declared_language=language,
        html_url=f"https://github.com/{owner}/{name}",
        **kwargs,
    )


@pytest.fixture
def repo_factory():
    return make_repo
