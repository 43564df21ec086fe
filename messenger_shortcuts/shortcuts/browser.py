from __future__ import annotations

import logging
import os
from typing import Any, Callable, Sequence

from playwright.async_api import (
    BrowserContext,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from ..config import settings
from ..models import ActionEvent
from .keymap import BINDING_NAME, DEFAULT_KEYMAP, Keybinding, build_listener_script
from .playwright_document import PlaywrightDocument


class BrowserSession:
    """Persistent Chromium profile hosting the chat page."""

    def __init__(self, user_data_dir: str | None = None, headless: bool | None = None) -> None:
        self.context: BrowserContext | None = None
        self.page: Page | None = None
        self._playwright: Playwright | None = None
        self.user_data_dir = os.path.expanduser(user_data_dir or settings.user_data_dir)
        self.headless = settings.headless if headless is None else headless

    async def __aenter__(self) -> "BrowserSession":
        self._playwright = await async_playwright().start()
        self.context = await self._playwright.chromium.launch_persistent_context(
            user_data_dir=self.user_data_dir,
            headless=self.headless,
            no_viewport=True,
        )
        self.page = self.context.pages[0] if self.context.pages else await self.context.new_page()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.context:
            await self.context.close()
        if self._playwright:
            await self._playwright.stop()

    def _require_page(self) -> Page:
        if not self.page:
            raise RuntimeError("Browser page is not initialized. Use within an async context manager.")
        return self.page

    async def install_shortcuts(
        self,
        on_action: Callable[[ActionEvent], None],
        bindings: Sequence[Keybinding] = DEFAULT_KEYMAP,
    ) -> None:
        """Forward keydown accelerators from every page load to ``on_action``."""

        if not self.context:
            raise RuntimeError("Browser context is not initialized. Use within an async context manager.")

        def forward(_source: Any, action: str, *args: Any) -> None:
            on_action(ActionEvent(action=action, args=list(args)))

        await self.context.expose_binding(BINDING_NAME, forward)
        await self.context.add_init_script(build_listener_script(bindings, BINDING_NAME))

    async def goto(self, url: str) -> None:
        page = self._require_page()
        await page.goto(url, wait_until="domcontentloaded", timeout=30000)
        try:
            await page.wait_for_load_state("networkidle", timeout=5000)
        except PlaywrightTimeoutError:
            logging.info("browser_networkidle_timeout url=%s", url)

    def document(self) -> PlaywrightDocument:
        return PlaywrightDocument(self._require_page())

    async def wait_closed(self) -> None:
        await self._require_page().wait_for_event("close", timeout=0)

    def __repr__(self) -> str:
        return f"BrowserSession(headless={self.headless})"
