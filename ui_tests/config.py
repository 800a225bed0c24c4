"""Shared configuration for the storefront UI tests.

Values come from environment variables, then `.env` / `.env.defaults`:
- PIZZA_BASE_URL: storefront under test (default http://localhost:5173)
- PLAYWRIGHT_HEADLESS: "true"/"1" to run headless (default true)
- PLAYWRIGHT_BROWSER: chromium, firefox or webkit (default chromium)
- PLAYWRIGHT_TIMEOUT_MS: default action/assertion timeout (default 10000)
"""
from __future__ import annotations

import os
from urllib.parse import urljoin

from jwt_pizza_mock.config import load_defaults

DEFAULT_BASE_URL = "http://localhost:5173"
SUPPORTED_BROWSERS = {"chromium", "firefox", "webkit"}


def _setting(key: str, fallback: str) -> str:
    return os.getenv(key) or load_defaults().get(key) or fallback


class UiTestConfig:
    """Settings for one UI test run, read once from the environment."""

    def __init__(self) -> None:
        self.base_url: str = _setting("PIZZA_BASE_URL", DEFAULT_BASE_URL)

        headless_str = _setting("PLAYWRIGHT_HEADLESS", "true")
        self.playwright_headless: bool = headless_str.lower() in {"true", "1"}

        browser_type = _setting("PLAYWRIGHT_BROWSER", "chromium").lower()
        if browser_type not in SUPPORTED_BROWSERS:
            raise RuntimeError(
                f"PLAYWRIGHT_BROWSER={browser_type} is not supported; "
                f"use one of {sorted(SUPPORTED_BROWSERS)}"
            )
        self.browser_type: str = browser_type

        timeout_str = _setting("PLAYWRIGHT_TIMEOUT_MS", "10000")
        try:
            self.timeout_ms: int = int(timeout_str)
        except ValueError:
            raise RuntimeError(f"PLAYWRIGHT_TIMEOUT_MS must be an integer, got '{timeout_str}'") from None

        print(f"[CONFIG] Storefront {self.base_url} ({self.browser_type}, headless={self.playwright_headless})")

    def url(self, path: str) -> str:
        """Return an absolute URL for the provided path."""
        return urljoin(self.base_url.rstrip("/") + "/", path.lstrip("/"))


# Singleton instance - initialized on first import
settings = UiTestConfig()
