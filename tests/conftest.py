import pytest
from fastapi.testclient import TestClient

from app.api.endpoints import get_fetcher, get_llm
from app.main import app
from tests.fakes import FakeFetcher, FakeLLM


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture
def client(fake_llm, fake_fetcher):
    app.dependency_overrides[get_llm] = lambda: fake_llm
    app.dependency_overrides[get_fetcher] = lambda: fake_fetcher
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
