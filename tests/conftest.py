import io

import httpx
import pytest

from methodscanner.core.config import ScanConfig
from methodscanner.core.models import ProbeRequest
from methodscanner.reporters.console import Log


class Recorder:
    """MockTransport handler that answers per method and remembers every request."""

    def __init__(self, statuses=None, bodies=None, default=405):
        self.statuses = statuses or {}
        self.bodies = bodies or {}
        self.default = default
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method = request.method
        body = self.bodies.get(method, b"")
        if callable(body):
            body = body(request)
        return httpx.Response(self.statuses.get(method, self.default), content=body)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def recorder():
    return Recorder


@pytest.fixture
def log_stream():
    return io.StringIO()


@pytest.fixture
def log(log_stream):
    return Log(verbose=2, color=False, stream=log_stream)


@pytest.fixture
def template():
    return ProbeRequest(url="https://example.com/", method="GET",
                        user_agent="MethodScanner-Test/1.0", timeout=5)


@pytest.fixture
def config():
    return ScanConfig(user_agent="MethodScanner-Test/1.0", timeout=5)
