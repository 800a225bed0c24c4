"""Playwright binding of the interception router, driven by in-process fakes."""
import json

import pytest

from jwt_pizza_mock.fixtures import TEST_USERS
from jwt_pizza_mock.interception import PizzaApiInterceptor, intercept_pizza_api
from jwt_pizza_mock.routes import RouteKind

BASE = "http://localhost:5173"


class FakeRequest:
    def __init__(self, method, url, body=None):
        self.method = method
        self.url = url
        self.post_data = json.dumps(body) if isinstance(body, (dict, list)) else body


class FakeRoute:
    def __init__(self, request):
        self.request = request
        self.fulfilled = None
        self.fell_back = False

    async def fulfill(self, status=None, json=None):
        self.fulfilled = {"status": status, "json": json}

    async def fallback(self):
        self.fell_back = True


class FakePage:
    """Records route registrations the way ``page.route`` would."""

    def __init__(self):
        self.routes = []
        self.closed = False

    async def route(self, url, handler):
        self.routes.append((url, handler))

    async def unroute(self, url, handler):
        self.routes.remove((url, handler))

    def is_closed(self):
        return self.closed

    async def request(self, method, url, body=None):
        """Deliver a request to the first matching rule, like the browser would."""
        request = FakeRequest(method, url, body)
        route = FakeRoute(request)
        for matcher, handler in self.routes:
            if matcher(url):
                await handler(route, request)
                return route
        return None


@pytest.mark.asyncio
async def test_install_registers_one_rule_per_category():
    page = FakePage()
    interceptor = PizzaApiInterceptor(page)

    await interceptor.install()

    assert len(page.routes) == len(RouteKind)
    assert interceptor.installed


@pytest.mark.asyncio
async def test_install_twice_is_an_error():
    interceptor = PizzaApiInterceptor(FakePage())
    await interceptor.install()

    with pytest.raises(RuntimeError):
        await interceptor.install()


@pytest.mark.asyncio
async def test_calls_are_fulfilled_from_the_router():
    page = FakePage()
    async with intercept_pizza_api(page) as api:
        login = await page.request("PUT", f"{BASE}/api/auth", {"email": "f@jwt.com", "password": "franchisee"})
        owned = await page.request("GET", f"{BASE}/api/franchise/4")

    assert login.fulfilled["status"] == 200
    assert login.fulfilled["json"]["user"]["id"] == 4
    assert [franchise["name"] for franchise in owned.fulfilled["json"]] == ["pizzaPocket"]
    assert api.router.session == TEST_USERS["franchisee"]
    assert [call.kind for call in api.calls] == [RouteKind.AUTH, RouteKind.FRANCHISE_BY_ID]


@pytest.mark.asyncio
async def test_error_statuses_are_forwarded():
    page = FakePage()
    async with intercept_pizza_api(page):
        me = await page.request("GET", f"{BASE}/api/user/me")

    assert me.fulfilled == {"status": 401, "json": {"message": "unauthorized"}}


@pytest.mark.asyncio
async def test_seeded_session_is_used():
    page = FakePage()
    async with intercept_pizza_api(page, logged_in_user=TEST_USERS["diner"]):
        history = await page.request("GET", f"{BASE}/api/order")

    assert history.fulfilled["json"]["dinerId"] == 3


@pytest.mark.asyncio
async def test_unmocked_method_falls_back():
    page = FakePage()
    async with intercept_pizza_api(page) as api:
        route = await page.request("PATCH", f"{BASE}/api/auth", {})

    assert route.fell_back
    assert route.fulfilled is None
    assert not api.calls[0].handled


@pytest.mark.asyncio
async def test_undecodable_body_falls_back():
    page = FakePage()
    async with intercept_pizza_api(page) as api:
        route = await page.request("POST", f"{BASE}/api/order", "{broken")

    assert route.fell_back
    assert api.calls[0].payload is None


@pytest.mark.asyncio
async def test_urls_outside_the_api_are_not_intercepted():
    page = FakePage()
    async with intercept_pizza_api(page):
        assert await page.request("GET", f"{BASE}/menu") is None
        assert await page.request("GET", f"{BASE}/assets/pizza1.png") is None


@pytest.mark.asyncio
async def test_calls_for_filters_by_kind_and_method():
    page = FakePage()
    async with intercept_pizza_api(page) as api:
        await page.request("GET", f"{BASE}/api/order")
        await page.request("POST", f"{BASE}/api/order", {"items": []})
        await page.request("GET", f"{BASE}/api/order/menu")

    assert len(api.calls_for(RouteKind.ORDER)) == 2
    [submit] = api.calls_for(RouteKind.ORDER, "post")
    assert submit.response.body["order"]["id"] == 100


@pytest.mark.asyncio
async def test_routes_released_even_when_scenario_fails():
    page = FakePage()

    with pytest.raises(AssertionError):
        async with intercept_pizza_api(page):
            assert page.routes
            raise AssertionError("scenario failed")

    assert page.routes == []


@pytest.mark.asyncio
async def test_uninstall_skips_closed_pages_and_is_idempotent():
    page = FakePage()
    interceptor = PizzaApiInterceptor(page)
    await interceptor.install()
    page.closed = True

    await interceptor.uninstall()
    await interceptor.uninstall()

    assert not interceptor.installed


@pytest.mark.asyncio
async def test_each_scope_gets_a_fresh_session():
    page = FakePage()
    async with intercept_pizza_api(page) as first:
        await page.request("PUT", f"{BASE}/api/auth", {"email": "a@jwt.com", "password": "admin"})
    async with intercept_pizza_api(page) as second:
        me = await page.request("GET", f"{BASE}/api/user/me")

    assert first.router.session is not None
    assert second.router.session is None
    assert me.fulfilled["status"] == 401
