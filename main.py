"""webrtc-echo signaling server entrypoint."""

import asyncio
import logging
import signal

from dotenv import load_dotenv

from webrtc_echo.config import Settings
from webrtc_echo.web import create_app, serve

logger = logging.getLogger(__name__)


async def main() -> None:
    load_dotenv()
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    loop = asyncio.get_running_loop()
    app = create_app(settings)
    runner = await serve(app)
    logger.info(
        "Media candidate %s:%d/%s",
        settings.media_address,
        settings.media_port,
        settings.candidate_protocol,
    )

    shutdown = asyncio.Event()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, shutdown.set)
    try:
        await shutdown.wait()
        logger.info("Shutting down...")
    finally:
        await runner.cleanup()


if __name__ == "__main__":
    asyncio.run(main())
