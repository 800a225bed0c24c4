"""Menu, checkout, payment and pizza verification."""
import pytest

from jwt_pizza_mock.order_token import ORDER_JWT
from jwt_pizza_mock.routes import RouteKind

from ui_tests import workflows

pytestmark = pytest.mark.asyncio


async def test_view_menu(browser):
    await browser.goto("/")

    await browser.click_button("Order now")

    await browser.expect_text("Awesome is a click away")
    await browser.expect_text("Veggie")
    await browser.expect_text("Pepperoni")


async def test_order_pizza_with_login(browser, pizza_api):
    await browser.goto("/")

    await workflows.start_order(browser)
    await workflows.add_pizzas(browser, ["Veggie"])
    await browser.click_button("Checkout")

    # Checkout redirects anonymous diners to the login form
    await workflows.fill_login_form(browser, "d@jwt.com", "diner")
    await browser.expect_text("Send me that pizza right now!")
    await browser.click_button("Pay now")

    await browser.expect_text("Here is your JWT Pizza!")
    submit = await workflows.wait_for_call(pizza_api, RouteKind.ORDER, "POST")
    assert submit.response.body["order"]["id"] == 100
    assert len(submit.response.body["order"]["items"]) == 1
    assert submit.response.body["jwt"] == ORDER_JWT


async def test_order_multiple_pizzas(browser):
    await browser.goto("/")
    await workflows.login_as(browser, "diner")

    await workflows.start_order(browser)
    await workflows.add_pizzas(browser, ["Veggie", "Pepperoni"])
    await browser.click_button("Checkout")

    await browser.expect_text("Send me those 2 pizzas right now!")


async def test_cancel_order_from_payment_page(browser):
    await browser.goto("/")
    await workflows.login_as(browser, "diner")

    await workflows.start_order(browser)
    await workflows.add_pizzas(browser, ["Veggie"])
    await browser.click_button("Checkout")
    await browser.click_button("Cancel")

    await browser.expect_text("Awesome is a click away")


async def test_verify_pizza_jwt(browser, pizza_api):
    await browser.goto("/")
    await workflows.login_as(browser, "diner")
    await workflows.order_pizzas(browser, ["Veggie"])

    await browser.click_button("Verify")

    await browser.expect_contains("#hs-jwt-modal", "valid")
    verify = await workflows.wait_for_call(pizza_api, RouteKind.ORDER_VERIFY)
    assert verify.response.body["message"] == "valid"


async def test_order_more_from_delivery_page(browser):
    await browser.goto("/")
    await workflows.login_as(browser, "diner")
    await workflows.order_pizzas(browser, ["Veggie"])

    await browser.click_button("Order more")

    await browser.expect_text("Awesome is a click away")
