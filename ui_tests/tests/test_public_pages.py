"""Public pages that render without an authenticated session."""
import pytest
from playwright.async_api import expect

from jwt_pizza_mock.routes import RouteKind

from ui_tests import workflows

pytestmark = pytest.mark.asyncio


async def test_home_page(browser):
    await browser.goto("/")

    assert await browser.title() == "JWT Pizza"
    await browser.expect_button("Order now")


async def test_about_page(browser):
    await browser.goto("/")

    await browser.click_link("About")
    await browser.expect_text("The secret sauce")
    await browser.expect_text("At JWT Pizza, our amazing employees")


async def test_history_page(browser):
    await browser.goto("/")

    await browser.click_link("History")
    await browser.expect_text("Mama Rucci, my my")


async def test_not_found_page(browser):
    await browser.goto("/nonexistent-page")

    await browser.expect_text("Oops")


async def test_docs_page(browser, pizza_api):
    await browser.goto("/docs")

    await browser.expect_text("JWT Pizza API")
    docs = await workflows.wait_for_call(pizza_api, RouteKind.DOCS)
    assert docs.response.body["version"] == "1.0.0"


async def test_direct_navigation_to_menu(browser):
    await browser.goto("/menu")

    await browser.expect_text("Awesome is a click away")


async def test_direct_navigation_to_about(browser):
    await browser.goto("/about")

    await browser.expect_text("The secret sauce")


async def test_direct_navigation_to_history(browser):
    await browser.goto("/history")

    await browser.expect_text("Mama Rucci, my my")


async def test_carousel_on_home_page(browser):
    await browser.goto("/")

    await expect(browser.page.locator(".hs-carousel")).to_be_visible()
