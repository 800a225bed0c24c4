"""Install an ``InterceptionRouter`` on a Playwright page.

Usage:
    async with intercept_pizza_api(page) as api:
        await page.goto(base_url)
        ...
        assert api.router.session is not None
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Awaitable, Callable, List, Optional, Tuple

from playwright.async_api import Page, Request, Route

from jwt_pizza_mock.exceptions import PayloadDecodeError
from jwt_pizza_mock.fixtures import Identity
from jwt_pizza_mock.router import InterceptionRouter, MockResponse, parse_payload
from jwt_pizza_mock.routes import RouteKind, url_predicate

logger = logging.getLogger(__name__)

RouteHandler = Callable[[Route, Request], Awaitable[None]]


@dataclass
class InterceptedCall:
    """One call seen by the interceptor and how it was answered."""

    kind: RouteKind
    method: str
    url: str
    payload: Any
    response: Optional[MockResponse]

    @property
    def handled(self) -> bool:
        return self.response is not None


class PizzaApiInterceptor:
    """Registers one ``page.route`` rule per API category."""

    def __init__(self, page: Page, router: InterceptionRouter | None = None) -> None:
        self.page = page
        self.router = router or InterceptionRouter()
        self.calls: List[InterceptedCall] = []
        self._registered: List[Tuple[Callable[[str], bool], RouteHandler]] = []

    @property
    def installed(self) -> bool:
        return bool(self._registered)

    async def install(self) -> None:
        if self._registered:
            raise RuntimeError("Interceptor already installed on this page")
        for kind in RouteKind:
            matcher = url_predicate(kind)
            handler = self._make_handler(kind)
            await self.page.route(matcher, handler)
            self._registered.append((matcher, handler))
        logger.debug(f"Installed {len(self._registered)} mock API routes")

    async def uninstall(self) -> None:
        registered, self._registered = self._registered, []
        if not registered:
            return
        if self.page.is_closed():
            logger.debug("Page already closed; mock API routes released with it")
            return
        for matcher, handler in registered:
            await self.page.unroute(matcher, handler)
        logger.debug(f"Removed {len(registered)} mock API routes")

    def calls_for(self, kind: RouteKind, method: str | None = None) -> List[InterceptedCall]:
        return [
            call for call in self.calls
            if call.kind is kind and (method is None or call.method == method.upper())
        ]

    def _make_handler(self, kind: RouteKind) -> RouteHandler:
        async def _handle(route: Route, request: Request) -> None:
            await self._answer(kind, route, request)

        return _handle

    async def _answer(self, kind: RouteKind, route: Route, request: Request) -> None:
        method = request.method.upper()
        try:
            payload = parse_payload(request.post_data)
        except PayloadDecodeError as exc:
            logger.error(f"{kind.value}: {method} {request.url} has an undecodable body ({exc.reason})")
            self.calls.append(InterceptedCall(kind, method, request.url, None, None))
            await route.fallback()
            return

        response = self.router.dispatch(kind, method, payload)
        self.calls.append(InterceptedCall(kind, method, request.url, payload, response))
        if response is None:
            logger.warning(f"Unmocked call left unhandled: {method} {request.url}")
            await route.fallback()
            return
        await route.fulfill(status=response.status, json=response.body)


@asynccontextmanager
async def intercept_pizza_api(
    page: Page,
    logged_in_user: Identity | None = None,
) -> AsyncIterator[PizzaApiInterceptor]:
    """Scoped interception: routes are always released when the block exits."""
    interceptor = PizzaApiInterceptor(page, InterceptionRouter(logged_in_user=logged_in_user))
    try:
        await interceptor.install()
        yield interceptor
    finally:
        await interceptor.uninstall()
