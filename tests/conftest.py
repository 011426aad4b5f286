import httpx
import pytest
from fastapi.testclient import TestClient

from proxy_backend.app import app
from proxy_backend.config import Settings, get_settings
from proxy_backend.services.upstream_client import create_http_client, get_http_client

UPSTREAM_URL = "https://upstream.test/v1/generate"


def make_settings(**overrides):
    values = {"ai_api_key": "test-key", "ai_api_url": UPSTREAM_URL, "ai_api_timeout": 5}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeUpstream:
    """Records outbound requests and answers them with ``reply``."""

    def __init__(self):
        self.requests = []
        self.reply = lambda request: httpx.Response(200, json={"url": "http://x/a.mp4"})

    def __call__(self, request):
        self.requests.append(request)
        return self.reply(request)


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def settings_factory():
    return make_settings


@pytest.fixture
def client(upstream):
    settings = make_settings()

    def override_http_client():
        http_client = create_http_client(settings, transport=httpx.MockTransport(upstream))
        try:
            yield http_client
        finally:
            http_client.close()

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_http_client] = override_http_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
