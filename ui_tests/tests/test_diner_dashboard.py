"""Diner dashboard backed by the current-user and order-history mocks."""
import pytest

from ui_tests import workflows

pytestmark = pytest.mark.asyncio


async def test_view_diner_dashboard(browser):
    await browser.goto("/")
    identity = await workflows.login_as(browser, "diner")

    await browser.click_link(workflows.initials(identity.name))

    await browser.expect_text("Your pizza kitchen")
    await browser.expect_text(identity.name)
    await browser.expect_text(identity.email)


async def test_view_order_history_on_diner_dashboard(browser):
    await browser.goto("/")
    identity = await workflows.login_as(browser, "diner")

    await browser.click_link(workflows.initials(identity.name))

    await browser.expect_text("Here is your history")
