"""Header and footer navigation."""
import pytest

pytestmark = pytest.mark.asyncio


async def test_navigate_home_from_logo(browser):
    await browser.goto("/")

    await browser.click_link("home")
    await browser.expect_button("Order now")


async def test_footer_links(browser):
    await browser.goto("/")

    for label in ("Franchise", "About", "History"):
        await browser.expect_role_contains("contentinfo", label)


async def test_register_link_from_login_page(browser):
    await browser.goto("/")

    await browser.click_link("Login")
    await browser.click(browser.page.get_by_role("main").get_by_text("Register"), "main 'Register'")
    await browser.expect_text("Welcome to the party")


async def test_login_link_from_register_page(browser):
    await browser.goto("/")

    await browser.click_link("Register")
    await browser.click(browser.page.get_by_role("main").get_by_text("Login"), "main 'Login'")
    await browser.expect_text("Welcome back")
