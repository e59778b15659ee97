"""
conftest.py: shared pytest fixtures
Adds the project root to sys.path so `techaudit.*` imports resolve correctly
regardless of where pytest is invoked from.
"""

import sys
from contextlib import contextmanager
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import httpx
import pytest
from fastapi.testclient import TestClient

from techaudit.config import Settings, get_settings
from techaudit.main import app
from techaudit.routers.audit_router import get_audit_proxy
from techaudit.services.audit_proxy import AuditProxy

SECRET = "s3cret"
UPSTREAM_URL = "https://pagespeed.test/runPagespeed"


def make_lighthouse(**overrides):
    """A complete lighthouseResult as PageSpeed returns it (trimmed)."""
    lighthouse = {
        "requestedUrl": "https://example.com",
        "categories": {
            "performance": {"id": "performance", "score": 0.82},
            "seo": {"id": "seo", "score": 0.92},
        },
        "audits": {
            "first-contentful-paint": {"score": 0.9, "displayValue": "1.2 s", "numericValue": 1200.5},
            "largest-contentful-paint": {"score": 0.7, "displayValue": "2.8 s", "numericValue": 2800.1},
            "total-blocking-time": {"score": 0.95, "displayValue": "120 ms", "numericValue": 120},
            "cumulative-layout-shift": {"score": 1, "displayValue": "0.02", "numericValue": 0.02},
            "final-screenshot": {"details": {"type": "screenshot", "data": "data:image/jpeg;base64,/9j/4AAQ"}},
            "meta-description": {"score": 1},
            "viewport": {"score": 1},
            "http-status-code": {"score": 1},
            "robots-txt": {"score": 0},
            "crawlable-anchors": {"score": 1},
            "link-text": {"score": 0},
            "is-crawlable": {"score": 1},
        },
    }
    lighthouse.update(overrides)
    return lighthouse


class FakePageSpeed:
    """Stands in for the PageSpeed API behind an httpx.MockTransport."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.payload = {"lighthouseResult": make_lighthouse()}
        self.exc = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last_params(self):
        return self.requests[-1].url.params


def make_settings(**overrides) -> Settings:
    values = {
        "techaudit_secret": SECRET,
        "pagespeed_api_key": "test-key",
        "pagespeed_api_url": UPSTREAM_URL,
        "upstream_timeout_seconds": 5.0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def upstream():
    return FakePageSpeed()


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def proxy(settings, upstream):
    return AuditProxy(settings, transport=upstream.transport)


@contextmanager
def client_for(settings: Settings, upstream: FakePageSpeed):
    """Test client with settings and the upstream transport injected."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_audit_proxy] = lambda: AuditProxy(settings, transport=upstream.transport)
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(settings, upstream):
    with client_for(settings, upstream) as c:
        yield c


@pytest.fixture
def auth():
    return {"x-techaudit-secret": SECRET}


@pytest.fixture
def safe_url():
    return "https://example.com"
