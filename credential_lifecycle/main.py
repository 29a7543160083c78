#!/usr/bin/env python3
"""
Main entry point for the credential lifecycle service
"""

import asyncio
import logging
import signal
import sys

from aiohttp import web

from .api import create_app
from .application_context import ApplicationContext
from .constants import ADMIN_HOST, ADMIN_PORT
from .errors.handling import log_error
from .logging_config import LoggerConfigurator

configurator = LoggerConfigurator()
configurator.configure()


def _install_signal_handlers(stop_event: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except (NotImplementedError, RuntimeError):
            # Windows event loops do not support add_signal_handler
            logging.debug(f"Signal handler unavailable for {sig.name}")


async def main() -> None:
    """Start the credential manager and serve the operational endpoints.

    Runs until SIGINT / SIGTERM, then shuts everything down in reverse order.
    """
    ctx = await ApplicationContext.create()
    runner: web.AppRunner | None = None
    try:
        logging.info("🚀 Starting credential lifecycle service")
        await ctx.start()
        runner = web.AppRunner(create_app(ctx.manager))
        await runner.setup()
        site = web.TCPSite(runner, ADMIN_HOST, ADMIN_PORT)
        await site.start()
        logging.info(f"🌐 Operational endpoints listening on http://{ADMIN_HOST}:{ADMIN_PORT}")
        stop_event = asyncio.Event()
        _install_signal_handlers(stop_event)
        await stop_event.wait()
    except asyncio.CancelledError:
        raise
    except Exception as e:
        log_error("Main application error", e)
        sys.exit(1)
    finally:
        if runner is not None:
            await runner.cleanup()
        await ctx.shutdown()
        logging.info("✅ Application shutdown complete")


def run() -> None:
    """Synchronous entry point for the application."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        sys.exit(0)
    except asyncio.CancelledError:
        sys.exit(0)
    except Exception as e:
        log_error("Top-level error", e)
        sys.exit(1)


if __name__ == "__main__":
    run()
