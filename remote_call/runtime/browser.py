"""Deliver call envelopes to functions running in a browser page."""

import logging
from contextlib import asynccontextmanager
from urllib.parse import urlparse

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, async_playwright

from remote_call.runtime.dispatcher_script import DISPATCHER_NAME, generate_dispatcher_script
from remote_call.runtime.envelope import ErrorKind, RemoteCallError

logger = logging.getLogger(__name__)


class PageTransport:
    """Transport evaluating envelopes through the dispatcher installed in a page."""

    def __init__(self, page: Page, dispatcher_name: str = DISPATCHER_NAME):
        self.page = page
        self.dispatcher_name = dispatcher_name

    async def install(self, identifiers: list[str] | None = None):
        """Install the dispatcher into the already loaded page."""
        await self.page.evaluate(
            generate_dispatcher_script(identifiers, dispatcher_name=self.dispatcher_name)
        )
        logger.info("Dispatcher installed in page")

    async def send(self, request: dict) -> dict:
        try:
            return await self.page.evaluate(
                "([name, request]) => window[name] "
                "? window[name](request) "
                ": { status: 'error', errorKind: 'not-implemented', "
                "message: 'No dispatcher installed for function: ' + request.identifier }",
                [self.dispatcher_name, request],
            )
        except PlaywrightError as e:
            logger.error(f"Page evaluation failed: {e}")
            raise RemoteCallError(
                str(e),
                kind=ErrorKind.TRANSPORT_FAILURE,
                identifier=request.get("identifier", ""),
            ) from e


@asynccontextmanager
async def open_page_transport(
    url: str,
    identifiers: list[str] | None = None,
    headless: bool = True,
):
    """Launch Chromium, load a page with the dispatcher and yield its transport.

    Args:
        url: The URL to load (http, https, or file://)
        identifiers: Identifiers the dispatcher may call; None allows any
        headless: Run the browser without a window

    Raises:
        RemoteCallError: transport-failure if the URL is invalid, the browser
            cannot be started, or the page fails to load
    """
    parsed = urlparse(url)
    if not parsed.scheme or parsed.scheme not in ("http", "https", "file"):
        logger.error(f"Invalid URL scheme: {url}")
        raise RemoteCallError(f"Invalid URL: {url}", kind=ErrorKind.TRANSPORT_FAILURE)

    try:
        playwright = await async_playwright().start()
    except PlaywrightError as e:
        logger.error(f"Failed to start Playwright: {e}")
        raise RemoteCallError(str(e), kind=ErrorKind.TRANSPORT_FAILURE) from e

    try:
        try:
            browser = await playwright.chromium.launch(headless=headless)
        except PlaywrightError as e:
            logger.error(f"Failed to launch browser: {e}")
            raise RemoteCallError(str(e), kind=ErrorKind.TRANSPORT_FAILURE) from e
        logger.info("Browser launched")

        try:
            try:
                page = await browser.new_page()
                await page.add_init_script(generate_dispatcher_script(identifiers))
                logger.info(f"Loading page: {url}")
                await page.goto(url, wait_until="networkidle")
            except PlaywrightError as e:
                logger.error(f"Failed to load page: {e}")
                raise RemoteCallError(str(e), kind=ErrorKind.TRANSPORT_FAILURE) from e
            yield PageTransport(page)
        finally:
            await browser.close()
            logger.info("Browser closed")
    finally:
        await playwright.stop()
