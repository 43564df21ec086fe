import asyncio
import contextlib
import logging
from typing import Callable

import uvicorn
from fastapi import FastAPI

from ..config import settings
from ..server.api import attach_session
from .browser import BrowserSession
from .dispatcher import ShortcutDispatcher
from .handlers import ShortcutHandlers
from .resolver import ElementResolver


def create_control_server(app: FastAPI) -> uvicorn.Server:
    return uvicorn.Server(
        uvicorn.Config(
            app,
            host=settings.control_host,
            port=settings.control_port,
            log_level=settings.log_level.lower(),
        )
    )


async def serve_control_server(server: uvicorn.Server) -> None:
    """Run the HTTP channel; a failed bind leaves the keymap bridge running."""

    try:
        await server.serve()
    except (SystemExit, OSError) as exc:
        # uvicorn reports bind failures with sys.exit() from startup.
        logging.error(
            "control_server_failed host=%s port=%s error=%r",
            server.config.host,
            server.config.port,
            exc,
        )


async def run_shortcuts_async(
    start_url: str | None = None,
    serve: bool | None = None,
    browser_factory: Callable[[], BrowserSession] = BrowserSession,
    server_factory: Callable[[FastAPI], uvicorn.Server] = create_control_server,
) -> None:
    """Open the chat page and serve shortcuts until the window is closed.

    The resolver, and with it the strategy cache, lives exactly as long as
    this document session.
    """

    start_url = start_url or settings.start_url
    serve = settings.control_server_enabled if serve is None else serve

    async with browser_factory() as browser:
        resolver = ElementResolver(browser.document())
        dispatcher = ShortcutDispatcher(ShortcutHandlers(resolver, settings))

        await browser.install_shortcuts(dispatcher.submit)
        await browser.goto(start_url)
        logging.info("shortcuts_ready url=%s serve=%s", start_url, serve)

        worker = asyncio.create_task(dispatcher.run(), name="shortcut-dispatcher")
        server: uvicorn.Server | None = None
        server_task: asyncio.Task | None = None
        if serve:
            server = server_factory(attach_session(dispatcher, resolver))
            server_task = asyncio.create_task(serve_control_server(server), name="shortcut-control-server")

        try:
            await browser.wait_closed()
        finally:
            if server is not None:
                server.should_exit = True
            worker.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await worker
            if server_task is not None:
                await server_task
            logging.info("shortcuts_stopped")


def run_shortcuts_blocking(start_url: str | None = None, serve: bool | None = None) -> None:
    """Synchronous wrapper for CLI usage."""

    asyncio.run(run_shortcuts_async(start_url=start_url, serve=serve))
