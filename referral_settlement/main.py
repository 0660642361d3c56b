"""
Service entry point.

Run with: python -m referral_settlement.main
"""

import asyncio
import signal

from aiohttp import web
from loguru import logger

from referral_settlement.api import create_app
from referral_settlement.config.settings import Settings, load_settings
from referral_settlement.initialization.database import (
    create_engine_from_settings,
    create_session_maker,
)
from referral_settlement.initialization.logging import setup_logging


async def start_server(
    app: web.Application, host: str, port: int
) -> web.AppRunner:
    """
    Start HTTP server.

    Args:
        app: Application to serve
        host: Host to bind to
        port: Port to bind to

    Returns:
        AppRunner for cleanup
    """
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()

    logger.info(f"Settlement API listening on {host}:{port}")
    return runner


async def stop_server(runner: web.AppRunner, timeout: int = 5) -> None:
    """Stop HTTP server gracefully."""
    logger.info("Stopping settlement API...")
    try:
        await asyncio.wait_for(runner.cleanup(), timeout=timeout)
    except TimeoutError:
        logger.warning(f"Server cleanup timed out after {timeout}s")


async def run(settings: Settings) -> None:
    """Run the service until SIGINT or SIGTERM."""
    engine = create_engine_from_settings(settings)
    session_maker = create_session_maker(engine)
    app = create_app(settings, session_maker)

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop_event.set)

    runner = await start_server(app, settings.server_host, settings.server_port)
    try:
        await stop_event.wait()
    finally:
        await stop_server(runner)
        await engine.dispose()
        logger.info("Database engine disposed")


def main() -> None:
    """Console script entry point."""
    settings = load_settings()
    setup_logging(settings)
    asyncio.run(run(settings))


if __name__ == "__main__":
    main()
