"""Entry point for the factor service."""

import logging
import os

from factor_service.server import build_server
from factor_service.settings import Settings


def _configure_logging() -> None:
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def main() -> None:
    """Bootstrap and run the HTTP server."""
    _configure_logging()
    logger = logging.getLogger("factor-service")
    settings = Settings.load()
    server = build_server(settings)

    try:
        server.startup()
        logger.info("Factor service running on %s", settings.service_url)
        logger.info("WSDL available at: %s?wsdl", settings.service_url)
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutdown requested (Ctrl+C).")
    except Exception:
        logger.exception("Server stopped due to an unexpected error.")
        raise
    finally:
        server.shutdown()
        logger.info("Server shutdown complete.")


if __name__ == "__main__":
    main()
