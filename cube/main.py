"""
CUBE entry point.

Starts either component:
- gateway: the aggregation gateway HTTP service
- shell: the interactive command console (talks to the gateway)

Run with: python -m cube.main gateway | shell
"""

import argparse
import asyncio
import logging
import sys
from typing import TextIO

from aiohttp import web

from cube.config import Settings, get_settings
from cube.handlers import create_app
from cube.services.factory import ServiceFactory
from cube.shell.console import run_console
from cube.shell.terminal import CommandShell


def setup_logging(level: str, stream: TextIO = sys.stdout) -> None:
    """
    Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        stream: Where records go (the shell keeps stdout for its log)
    """
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=stream,
    )

    # Reduce noise from external libraries
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def shell_log_level(settings: Settings) -> str:
    """
    Log level for the shell process.

    Records share the terminal with the console, so INFO chatter is hidden
    unless LOG_LEVEL was set explicitly.
    """
    if "log_level" in settings.model_fields_set:
        return settings.log_level
    return "WARNING"


def validate_production_config(settings: Settings) -> None:
    """
    Validate that required API keys are present in production mode.

    Raises:
        RuntimeError: If required env vars are missing.
    """
    if settings.use_mock_services:
        return  # Mock mode doesn't need real API keys

    missing = []
    if not settings.dextools_api_key:
        missing.append("DEXTOOLS_API_KEY")

    if missing:
        raise RuntimeError(
            f"Missing required env vars for production mode: {', '.join(missing)}. "
            f"Set USE_MOCK_SERVICES=true for development without API keys."
        )


async def run_gateway(settings: Settings) -> None:
    """Serve the gateway until cancelled."""
    logger = logging.getLogger(__name__)
    validate_production_config(settings)

    logger.info("=" * 50)
    logger.info("CUBE gateway starting...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Mock mode: {settings.use_mock_services}")
    logger.info("=" * 50)

    if settings.is_production and settings.use_mock_services:
        logger.warning("Production environment is serving mock data")

    factory = ServiceFactory(settings)
    app = create_app(factory.create_gateway())

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, settings.gateway_host, settings.gateway_port)
    await site.start()
    logger.info(
        f"Gateway listening on http://{settings.gateway_host}:{settings.gateway_port}"
    )

    try:
        await asyncio.Event().wait()
    finally:
        logger.info("Shutting down...")
        await runner.cleanup()


async def run_shell(settings: Settings) -> None:
    """Run the interactive console against the configured gateway."""
    factory = ServiceFactory(settings)
    shell = CommandShell(
        factory.create_gateway_client(),
        check_display_delay=settings.check_display_delay_seconds,
    )
    shell.start()
    await run_console(shell)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="cube", description="CUBE token terminal")
    parser.add_argument(
        "component",
        choices=["gateway", "shell"],
        help="gateway: serve the HTTP API; shell: open the command console",
    )
    return parser.parse_args(argv)


def run(argv: list[str] | None = None) -> None:
    """Console-script entry point."""
    args = parse_args(argv)
    settings = get_settings()

    if args.component == "gateway":
        setup_logging(settings.log_level)
        main = run_gateway(settings)
    else:
        setup_logging(shell_log_level(settings), stream=sys.stderr)
        main = run_shell(settings)

    try:
        asyncio.run(main)
    except KeyboardInterrupt:
        print(f"\n{args.component.capitalize()} stopped by user.")


if __name__ == "__main__":
    run()
