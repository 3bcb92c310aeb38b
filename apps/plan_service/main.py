"""Main entry point for plan service."""
import asyncio
import sys
import signal
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from aiohttp import web
import structlog

from apps.plan_service.config import config, validate_config
from apps.plan_service.handlers.health import health_handler
from apps.plan_service.handlers.plan import plan_handler
from apps.plan_service.utils.logger_utils import configure_logging

# Configure structured logging
configure_logging(config.LOG_LEVEL)

logger = structlog.get_logger()


def create_app() -> web.Application:
    """Create the aiohttp application with all routes."""
    app = web.Application()
    app.router.add_post("/api/plan", plan_handler)
    app.router.add_get("/healthz", health_handler)
    return app


async def main():
    """Main function."""
    validate_config()

    logger.info("plan_service_starting", host=config.SERVICE_HOST, port=config.SERVICE_PORT)

    app = create_app()
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, config.SERVICE_HOST, config.SERVICE_PORT)
    await site.start()

    logger.info("plan_endpoint_started", port=config.SERVICE_PORT)

    # Setup signal handlers for graceful shutdown
    shutdown_event = asyncio.Event()

    def signal_handler(sig, frame):
        logger.info("shutdown_signal_received", signal=sig)
        shutdown_event.set()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    try:
        await shutdown_event.wait()
        logger.info("plan_service_stopping_gracefully")
    finally:
        try:
            await runner.cleanup()
        except Exception as e:
            logger.warning("runner_cleanup_error", error=str(e))

        logger.info("plan_service_stopped")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("plan_service_interrupted")
        sys.exit(0)
