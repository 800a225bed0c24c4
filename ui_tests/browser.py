"""Thin wrapper around Playwright for ergonomic storefront interactions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Pattern

from playwright.async_api import Locator, Page, TimeoutError as PlaywrightTimeout, expect

from ui_tests.config import settings


@dataclass
class ToolError(Exception):
    """Raised when a browser operation fails."""

    name: str
    payload: Dict[str, Any]
    message: str

    def __str__(self) -> str:  # pragma: no cover - human readable helper
        return f"{self.name} failed ({self.message}) with payload={self.payload}"


class Browser:
    """Convenience wrapper over a Playwright page.

    Interactions locate elements the way a user sees them (role + accessible
    name, placeholder, visible text). Interaction failures raise ``ToolError``;
    visibility checks raise ``AssertionError`` through Playwright's ``expect``.
    """

    def __init__(self, page: Page) -> None:
        self._page = page
        self.current_url: str | None = None

    @property
    def page(self) -> Page:
        return self._page

    async def _update_state(self) -> None:
        self.current_url = self._page.url

    async def goto(self, path: str = "/", wait_until: str = "domcontentloaded") -> Dict[str, Any]:
        """Navigate to a storefront path (relative to PIZZA_BASE_URL)."""
        url = settings.url(path)
        try:
            response = await self._page.goto(url, wait_until=wait_until)
        except PlaywrightTimeout as exc:
            raise ToolError(name="goto", payload={"url": url, "wait_until": wait_until}, message=str(exc))
        await self._update_state()
        return {"url": self.current_url, "status": response.status if response else None}

    async def title(self) -> str:
        return await self._page.title()

    # ---- locators ---------------------------------------------------------------
    def link(self, name: str, within: str | None = None) -> Locator:
        """Link by accessible name, optionally inside a labelled region (e.g. "Global")."""
        scope = self._page.get_by_label(within) if within else self._page
        return scope.get_by_role("link", name=name)

    def button(self, name: str, exact: bool = False) -> Locator:
        return self._page.get_by_role("button", name=name, exact=exact)

    def row(self, name: str | Pattern[str]) -> Locator:
        return self._page.get_by_role("row", name=name)

    def text(self, text: str, exact: bool = False) -> Locator:
        return self._page.get_by_text(text, exact=exact)

    # ---- interactions -------------------------------------------------------------
    async def click(self, locator: Locator, description: str) -> Dict[str, Any]:
        try:
            await locator.click()
        except PlaywrightTimeout as exc:
            raise ToolError(name="click", payload={"target": description}, message=str(exc))
        await self._update_state()
        return {"target": description, "url": self.current_url}

    async def click_link(self, name: str, within: str | None = None) -> Dict[str, Any]:
        return await self.click(self.link(name, within), f"link '{name}'")

    async def click_button(self, name: str, exact: bool = False, first: bool = False) -> Dict[str, Any]:
        locator = self.button(name, exact=exact)
        if first:
            locator = locator.first
        return await self.click(locator, f"button '{name}'")

    async def fill(self, placeholder: str, value: str) -> Dict[str, Any]:
        """Fill the input identified by its placeholder text."""
        try:
            await self._page.get_by_placeholder(placeholder).fill(value)
        except PlaywrightTimeout as exc:
            raise ToolError(name="fill", payload={"placeholder": placeholder, "value": value}, message=str(exc))
        return {"placeholder": placeholder, "value": value}

    async def select(self, value: str | list[str]) -> Dict[str, Any]:
        """Select option(s) in the page's combobox."""
        try:
            await self._page.get_by_role("combobox").select_option(value)
        except PlaywrightTimeout as exc:
            raise ToolError(name="select", payload={"value": value}, message=str(exc))
        return {"value": value}

    # ---- assertions ---------------------------------------------------------------
    async def expect_text(self, text: str, exact: bool = False) -> None:
        await expect(self.text(text, exact=exact)).to_be_visible()

    async def expect_link(self, name: str) -> None:
        await expect(self.link(name)).to_be_visible()

    async def expect_button(self, name: str) -> None:
        await expect(self.button(name)).to_be_visible()

    async def expect_contains(self, selector: str, expected: str) -> None:
        await expect(self._page.locator(selector)).to_contain_text(expected)

    async def expect_role_contains(self, role: str, expected: str) -> None:
        await expect(self._page.get_by_role(role)).to_contain_text(expected)
