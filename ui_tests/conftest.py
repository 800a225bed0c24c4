import sys
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

ROOT = Path(__file__).resolve().parents[1]
for entry in (ROOT, ROOT / "src"):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))

from jwt_pizza_mock.fixtures import find_identity
from jwt_pizza_mock.interception import intercept_pizza_api

from ui_tests.browser import Browser
from ui_tests.config import settings
from ui_tests.playwright_client import PlaywrightClient


def pytest_collection_modifyitems(config, items):
    """Every scenario under ui_tests drives a real browser."""
    for item in items:
        if item.path.is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.e2e)


@pytest.fixture(scope="session", autouse=True)
def require_storefront():
    """Skip the UI layer when no storefront is being served at PIZZA_BASE_URL."""
    try:
        httpx.get(settings.base_url, timeout=3.0)
    except httpx.HTTPError as exc:
        pytest.skip(f"Storefront not reachable at {settings.base_url}: {exc}")


@pytest_asyncio.fixture()
async def playwright_client():
    """Create a Playwright client instance (one isolated context per test)."""
    async with PlaywrightClient() as client:
        yield client


@pytest_asyncio.fixture()
async def pizza_api(playwright_client, request):
    """Mocked backend for this scenario's page.

    Use ``@pytest.mark.logged_in_as("diner")`` to start with a session.
    """
    marker = request.node.get_closest_marker("logged_in_as")
    logged_in_user = find_identity(marker.args[0]) if marker else None
    async with intercept_pizza_api(playwright_client.page, logged_in_user=logged_in_user) as api:
        yield api


@pytest_asyncio.fixture()
async def browser(playwright_client, pizza_api):
    """Browser facade on a page whose API calls are already intercepted."""
    return Browser(playwright_client.page)
