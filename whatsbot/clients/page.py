"""Remote execution context: the controlled WhatsApp Web page."""

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol

from playwright.async_api import BrowserContext, Page, Playwright, async_playwright

if TYPE_CHECKING:
    from whatsbot.core.config import ClientOptions

logger = logging.getLogger(__name__)


class InwardAPI(Protocol):
    """Host → page calls. Arguments are serialized, results awaited."""

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        ...

    async def wait_for_function(self, predicate: str) -> None:
        ...

    async def wait_for_selector(self, selector: str) -> None:
        ...


class OutwardAPI(Protocol):
    """Page → host calls. The page fires and does not wait for the host."""

    async def expose(self, name: str, callback: Callable[..., Any]) -> None:
        ...


class RemoteContext(InwardAPI, OutwardAPI, Protocol):
    """A page that can be driven in both directions and closed."""

    async def close(self) -> None:
        ...


class PlaywrightContext:
    """
    RemoteContext backed by a Playwright page.

    None of the waits carry a timeout: the page may take arbitrarily long
    to pair or to load its store, and giving up leaves the client unusable.
    """

    def __init__(
        self,
        page: Page,
        browser_context: Optional[BrowserContext] = None,
        playwright: Optional[Playwright] = None,
    ):
        self.page = page
        self.browser_context = browser_context
        self.playwright = playwright

    @classmethod
    async def launch(cls, options: "ClientOptions") -> "PlaywrightContext":
        """Start Chromium with a persistent profile and open WhatsApp Web."""
        playwright = await async_playwright().start()
        logger.info(f"🌐 Launching browser (profile: {options.user_data_dir})")

        browser_context = await playwright.chromium.launch_persistent_context(
            user_data_dir=str(options.user_data_dir),
            headless=options.headless,
            user_agent=options.user_agent,
            args=[
                "--disable-blink-features=AutomationControlled",
                "--disable-dev-shm-usage",
            ],
        )
        page = browser_context.pages[0] if browser_context.pages else await browser_context.new_page()
        await page.goto(options.url)
        logger.info(f"✅ Opened {options.url}")
        return cls(page, browser_context, playwright)

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        return await self.page.evaluate(script, arg)

    async def wait_for_function(self, predicate: str) -> None:
        await self.page.wait_for_function(predicate, timeout=0)

    async def wait_for_selector(self, selector: str) -> None:
        await self.page.wait_for_selector(selector, timeout=0)

    async def expose(self, name: str, callback: Callable[..., Any]) -> None:
        await self.page.expose_function(name, callback)

    async def close(self) -> None:
        """Close the browser context and stop Playwright."""
        if self.browser_context:
            await self.browser_context.close()
            self.browser_context = None
        if self.playwright:
            await self.playwright.stop()
            self.playwright = None
