"""Environment-driven configuration utilities for the factor service."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True, slots=True)
class Settings:
    """Container for runtime configuration."""

    host: str = "0.0.0.0"
    port: int = 8080
    service_path: str = "/factorservice"
    # Also the address advertised in the service descriptor.
    service_url: str = "http://localhost:8080/factorservice"
    api_timeout: float = 30.0

    @classmethod
    def load(cls) -> "Settings":
        """
        Load configuration from environment variables.

        Python-dotenv is used so developers can rely on a local .env file without
        exporting variables globally.
        """
        load_dotenv()

        host = os.getenv("FACTOR_SERVICE_HOST", "").strip() or "0.0.0.0"

        port_raw = os.getenv("FACTOR_SERVICE_PORT", "").strip() or "8080"
        try:
            port = int(port_raw)
        except ValueError as exc:
            raise ValueError("FACTOR_SERVICE_PORT must be an integer.") from exc
        if not 0 < port <= 65535:
            raise ValueError("FACTOR_SERVICE_PORT must be between 1 and 65535.")

        service_path = os.getenv("FACTOR_SERVICE_PATH", "").strip() or "/factorservice"
        if not service_path.startswith("/"):
            raise ValueError("FACTOR_SERVICE_PATH must start with '/'.")

        service_url = (
            os.getenv("FACTOR_SERVICE_URL", "").strip()
            or f"http://localhost:{port}{service_path}"
        )

        api_timeout_raw = os.getenv("API_TIMEOUT", "").strip() or "30"
        try:
            api_timeout = float(api_timeout_raw)
        except ValueError as exc:
            raise ValueError("API_TIMEOUT must be a numeric value.") from exc
        if api_timeout <= 0:
            raise ValueError("API_TIMEOUT must be greater than zero.")

        return cls(
            host=host,
            port=port,
            service_path=service_path,
            service_url=service_url,
            api_timeout=api_timeout,
        )
