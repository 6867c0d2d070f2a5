"""Shared fixtures: app wired to a fake law API."""

import httpx
import pytest
from fastapi.testclient import TestClient

from law_proxy.config import Settings
from law_proxy.dependencies import get_law_client
from law_proxy.law_client import LawSearchClient
from law_proxy.main import create_app

TEST_API_URL = "https://law.test/DRF/lawSearch.do"


class FakeLawAPI:
    """Records outbound requests and replies with a canned body."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body = '{"LawSearch": {"totalCnt": 0}}'
        self.content_type = "application/json; charset=utf-8"
        self.error: Exception | None = None

    def reply(self, body: str, status_code: int = 200, content_type: str | None = None) -> None:
        self.body = body
        self.status_code = status_code
        if content_type:
            self.content_type = content_type

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(
            self.status_code,
            content=self.body.encode("utf-8"),
            headers={"Content-Type": self.content_type},
        )

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def settings():
    """Test settings, isolated from the environment's .env file."""
    return Settings(law_oc="test-oc", law_api_url=TEST_API_URL, _env_file=None)


@pytest.fixture
def fake_api():
    return FakeLawAPI()


@pytest.fixture
def law_client(settings, fake_api):
    return LawSearchClient(
        oc=settings.law_oc,
        api_url=settings.law_api_url,
        user_agent=settings.law_user_agent,
        transport=httpx.MockTransport(fake_api),
    )


@pytest.fixture
def app(settings, law_client):
    application = create_app(settings)
    application.dependency_overrides[get_law_client] = lambda: law_client
    return application


@pytest.fixture
def client(app):
    return TestClient(app)
