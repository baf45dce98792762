import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import get_givebutter_client, get_stream_client
from app.connectors.givebutter.client import GivebutterClient
from app.connectors.stream.client import StreamFeedClient
from app.main import app
from tests.helpers.pages import CAMPAIGN_URL, STREAM_BASE, mock_http, upstream_handler


class Upstream:
    """Mutable holder for the handler answering outbound requests."""

    def __init__(self):
        self.handler = upstream_handler()
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
def upstream():
    return Upstream()


@pytest.fixture
def client(upstream):
    """TestClient with the page and feed clients pointed at ``upstream``."""

    async def override_page_client():
        page_client = GivebutterClient(campaign_url=CAMPAIGN_URL, http_client=mock_http(upstream))
        try:
            yield page_client
        finally:
            await page_client._client.aclose()

    async def override_stream_client():
        feed_client = StreamFeedClient(base_url=STREAM_BASE, feed_id=42, http_client=mock_http(upstream))
        try:
            yield feed_client
        finally:
            await feed_client._client.aclose()

    app.dependency_overrides[get_givebutter_client] = override_page_client
    app.dependency_overrides[get_stream_client] = override_stream_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_givebutter_client, None)
        app.dependency_overrides.pop(get_stream_client, None)
