"""Reusable storefront workflows shared by the UI scenarios."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import anyio

from jwt_pizza_mock.fixtures import TEST_USERS, Identity
from jwt_pizza_mock.interception import InterceptedCall, PizzaApiInterceptor
from jwt_pizza_mock.routes import RouteKind

from ui_tests.browser import Browser

DEFAULT_STORE_ID = "1"


@dataclass
class RegistrationFormData:
    name: str
    email: str
    password: str


def initials(name: str) -> str:
    """Header badge text the storefront shows for a logged-in user."""
    return "".join(part[0].upper() for part in name.split() if part)


async def fill_login_form(browser: Browser, email: str, password: str) -> None:
    await browser.fill("Email address", email)
    await browser.fill("Password", password)
    await browser.click_button("Login")


async def login_user(browser: Browser, email: str, password: str) -> None:
    """Open the login page from the header and submit credentials."""
    await browser.click_link("Login")
    await fill_login_form(browser, email, password)


async def login_as(browser: Browser, key: str) -> Identity:
    """Log in as a fixture user (``diner``, ``franchisee`` or ``admin``)."""
    identity = TEST_USERS[key]
    await login_user(browser, identity.email, identity.password)
    return identity


async def register_user(browser: Browser, data: RegistrationFormData) -> None:
    await browser.click_link("Register")
    await browser.expect_text("Welcome to the party")
    await browser.fill("Full name", data.name)
    await browser.fill("Email address", data.email)
    await browser.fill("Password", data.password)
    await browser.click_button("Register")


async def start_order(browser: Browser, store_id: str = DEFAULT_STORE_ID) -> None:
    """Open the menu from the home page and pick a store."""
    await browser.click_button("Order now")
    await browser.select(store_id)


async def add_pizzas(browser: Browser, titles: Sequence[str]) -> None:
    for title in titles:
        await browser.click_link(f"Image Description {title}")
    await browser.expect_contains("form", f"Selected pizzas: {len(titles)}")


async def checkout_and_pay(browser: Browser) -> None:
    await browser.click_button("Checkout")
    await browser.click_button("Pay now")
    await browser.expect_text("Here is your JWT Pizza!")


async def order_pizzas(browser: Browser, titles: Sequence[str] = ("Veggie",)) -> None:
    """Full order flow for an already logged-in diner."""
    await start_order(browser)
    await add_pizzas(browser, titles)
    await checkout_and_pay(browser)


async def open_franchise_dashboard(browser: Browser) -> None:
    await browser.click_link("Franchise", within="Global")


async def open_admin_dashboard(browser: Browser) -> None:
    await browser.click_link("Admin")
    await browser.expect_text("Mama Ricci's kitchen")


async def wait_for_call(
    api: PizzaApiInterceptor,
    kind: RouteKind,
    method: str | None = None,
    timeout: float = 5.0,
    interval: float = 0.1,
) -> InterceptedCall:
    """Poll until the interceptor has answered a call of ``kind``; return the latest."""
    deadline = anyio.current_time() + timeout
    while anyio.current_time() <= deadline:
        calls = api.calls_for(kind, method)
        if calls:
            return calls[-1]
        await anyio.sleep(interval)
    raise AssertionError(f"Timed out waiting for a {method or 'any'} {kind.value} call")
