import httpx
import pytest

from adapters.jira_client import JiraClient
from core.config import AppSettings


class RecordingTransport:
    """In-memory stand-in for `JiraTransport`.

    - build_url() prefixes a fixed API root.
    - make_request() records (descriptor, success_message) and returns
      `success_message` when given, otherwise `response` (or raises `error`).
    """

    api_root = "https://jira.example.com/rest/api/2"

    def __init__(self, *, response=None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[tuple] = []

    def build_url(self, path: str) -> str:
        return self.api_root + path

    async def make_request(self, descriptor, success_message=None):
        self.calls.append((descriptor, success_message))
        if self.error is not None:
            raise self.error
        if success_message is not None:
            return success_message
        return self.response

    @property
    def last_descriptor(self):
        return self.calls[-1][0]


@pytest.fixture
def recording_transport():
    return RecordingTransport()


@pytest.fixture
def make_recording_transport():
    return RecordingTransport


@pytest.fixture
def settings():
    return AppSettings(
        _env_file=None,
        base_url="https://jira.example.com/",
        username="alice",
        api_token="secret",
    )


@pytest.fixture
def make_jira_client(settings):
    """Build a JiraClient whose HTTP traffic goes to `handler`.

    The handler receives each `httpx.Request`; every request is also appended
    to the returned list so tests can inspect what was sent.
    """

    def _factory(handler, *, client_settings: AppSettings | None = None):
        seen: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        used_settings = client_settings or settings
        http_client = httpx.AsyncClient(
            transport=httpx.MockTransport(_record),
            follow_redirects=True,
        )
        return JiraClient(used_settings, http_client=http_client), seen

    return _factory
