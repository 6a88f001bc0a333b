"""
Core server bootstrap for the factor service.

Wires the stateless request handler into a Starlette application and runs it
with uvicorn.
"""

import logging

import uvicorn
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Route

from factor_service.handler import FactorServiceHandler
from factor_service.settings import Settings

XML_MEDIA_TYPE = "text/xml"


def build_app(settings: Settings, handler: FactorServiceHandler | None = None) -> Starlette:
    """Create the ASGI application serving the configured service path."""
    handler = handler or FactorServiceHandler.from_settings(settings)

    async def factor_endpoint(request: Request) -> Response:
        if request.method == "POST":
            body = (await request.body()).decode("utf-8", errors="replace")
            return Response(handler.process(body), media_type=XML_MEDIA_TYPE)
        return Response(handler.describe(), media_type=XML_MEDIA_TYPE)

    # Starlette answers any other method on this route with 405.
    return Starlette(
        routes=[Route(settings.service_path, factor_endpoint, methods=["GET", "POST"])],
    )


class ServerApp:
    """Server container holding the configured ASGI application."""

    def __init__(self, settings: Settings) -> None:
        self._logger = logging.getLogger(__name__)
        self._settings = settings
        self._handler = FactorServiceHandler.from_settings(settings)
        self._app = build_app(settings, self._handler)
        self._server: uvicorn.Server | None = None

    def startup(self) -> None:
        """Prepare the uvicorn server for the configured address."""
        self._logger.info("Starting server bootstrap")
        config = uvicorn.Config(
            self._app,
            host=self._settings.host,
            port=self._settings.port,
            log_level="warning",
        )
        self._server = uvicorn.Server(config)

    def shutdown(self) -> None:
        """Ask a running server to exit."""
        self._logger.info("Shutting down server bootstrap")
        if self._server is not None:
            self._server.should_exit = True
            self._server = None

    def serve_forever(self) -> None:
        """Run the HTTP server until interrupted."""
        if self._server is None:
            raise RuntimeError("Server is not initialized; call startup() first.")
        self._logger.info(
            "Starting HTTP transport",
            extra={"host": self._settings.host, "port": self._settings.port},
        )
        self._server.run()

    async def serve_async(self) -> None:
        """Async helper for running the server inside an existing loop (used by smoke tests)."""
        if self._server is None:
            raise RuntimeError("Server is not initialized; call startup() first.")
        await self._server.serve()

    @property
    def app(self) -> Starlette:
        """Expose the configured ASGI application."""
        return self._app


def build_server(settings: Settings) -> ServerApp:
    """Factory used by main.py to create the configured server instance."""
    return ServerApp(settings)
