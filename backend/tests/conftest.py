import pathlib
import sys
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

BACKEND_DIR = pathlib.Path(__file__).resolve().parents[1]
TESTS_DIR = BACKEND_DIR / "tests"
for path in (BACKEND_DIR, TESTS_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from fakes import FakeGeminiModel, make_client, make_settings  # noqa: E402
from hikeclub.services.gemini_proxy import GeminiProxyService  # noqa: E402


@pytest.fixture
def fake_model() -> FakeGeminiModel:
    return FakeGeminiModel()


@pytest.fixture
def proxy_service(fake_model: FakeGeminiModel) -> GeminiProxyService:
    return GeminiProxyService(llm=fake_model, model_name="gemini-2.5-flash")


@pytest.fixture
def client(proxy_service: GeminiProxyService) -> Generator[TestClient, None, None]:
    """Test client for an app whose proxy talks to the fake model."""
    with make_client(make_settings(), proxy_service) as test_client:
        yield test_client


@pytest.fixture
def unconfigured_client(monkeypatch) -> Generator[TestClient, None, None]:
    """Test client for an app started without a Gemini credential."""
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    settings = make_settings(GOOGLE_API_KEY=None)
    with make_client(settings, None) as test_client:
        yield test_client
