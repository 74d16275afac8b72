import os
import time
from typing import List

import pytest

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("RATE_LIMIT_REQUESTS", "30")
os.environ.setdefault("CONTACT_TO_EMAIL", "hello@studio.test")

from fastapi.testclient import TestClient

from studio_site.api.dependencies import get_contact_handler
from studio_site.domain.models import DispatchResult, EmailMessage, Sent
from studio_site.main import app
from studio_site.middleware.rate_limiter import limiter
from studio_site.services.contact.handler import ContactHandler
from studio_site.services.contact.rate_limiter import RateLimiter

OWNER_EMAIL = "hello@studio.test"
SENDER = "Studio <hi@studio.test>"


class ManualClock:
    """Epoch-millisecond clock that only moves when told to."""

    def __init__(self, now_ms: int = 1_700_000_000_000):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


class RecordingDispatcher:
    """Stands in for EmailDispatcher; records every message it is asked to send."""

    def __init__(self, *results: DispatchResult):
        self.sent: List[EmailMessage] = []
        self._results = list(results)

    async def send(self, message: EmailMessage) -> DispatchResult:
        self.sent.append(message)
        if self._results:
            return self._results.pop(0)
        return Sent(from_used=message.from_, id=f"email_{len(self.sent)}")


def now_ms() -> int:
    return int(time.time() * 1000)


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def make_handler(clock, dispatcher):
    def _make(**overrides) -> ContactHandler:
        options = dict(
            rate_limiter=RateLimiter(clock=clock),
            dispatcher=dispatcher,
            to_email=OWNER_EMAIL,
            from_email=SENDER,
            is_production=False,
            studio_name="PacNW Studio",
            clock=clock,
        )
        options.update(overrides)
        return ContactHandler(**options)

    return _make


@pytest.fixture
def api_handler(dispatcher):
    """Handler on the real clock, as the endpoint would run it."""
    return ContactHandler(
        rate_limiter=RateLimiter(),
        dispatcher=dispatcher,
        to_email=OWNER_EMAIL,
        from_email=SENDER,
        is_production=False,
    )


@pytest.fixture
def client(api_handler):
    limiter.reset()
    app.dependency_overrides[get_contact_handler] = lambda: api_handler
    yield TestClient(app)
    app.dependency_overrides.clear()
    limiter.reset()
