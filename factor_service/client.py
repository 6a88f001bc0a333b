"""
Factor service client wrapper.

Encodes findFactors calls into request envelopes, sends them over HTTP and
turns success, fault and transport outcomes into return values or typed
exceptions.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import httpx

from factor_service.envelope import (
    EnvelopeDecodeError,
    decode_fault,
    decode_response,
    encode_request,
    parse_result,
)
from factor_service.http_client import create_factor_client
from factor_service.settings import Settings

logger = logging.getLogger(__name__)

REQUEST_HEADERS = {
    "Content-Type": "text/xml; charset=utf-8",
    "SOAPAction": "findFactors",
}


class FactorServiceError(RuntimeError):
    """Represents failures when communicating with the factor service."""


class FactorServiceFault(FactorServiceError):
    """The service answered with a fault envelope."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"Factor service fault ({code}): {message}")
        self.code = code
        self.message = message


@dataclass(slots=True)
class FactorServiceClient:
    """Typed wrapper around the shared AsyncClient."""

    _client: httpx.AsyncClient
    _service_url: str

    @classmethod
    def from_settings(cls, settings: Settings) -> "FactorServiceClient":
        """Factory that builds the client from Settings."""
        return cls(create_factor_client(settings), settings.service_url)

    async def aclose(self) -> None:
        """Close the underlying HTTP resources."""
        await self._client.aclose()

    async def find_factors(self, numbers: Sequence[int], divisor: int) -> list[int]:
        """Return the numbers the service reports as divisible by ``divisor``."""
        envelope = encode_request(numbers, divisor)
        logger.debug(
            "Sending findFactors request",
            extra={"count": len(numbers), "divisor": divisor},
        )
        text = await self._request("POST", content=envelope, headers=REQUEST_HEADERS)

        try:
            fault = decode_fault(text)
            if fault is None:
                return parse_result(decode_response(text))
        except EnvelopeDecodeError as exc:
            logger.error("Factor service returned an undecodable response")
            raise FactorServiceError(f"Factor service returned an invalid response: {exc}") from exc

        logger.warning("Factor service returned a fault: %s", fault.message)
        raise FactorServiceFault(fault.code, fault.message)

    async def describe(self) -> str:
        """Fetch the service descriptor document."""
        return await self._request("GET", params={"wsdl": ""})

    async def _request(self, method: str, **kwargs: Any) -> str:
        """Normalized request handler for all outgoing calls."""

        def _transport_error(message: str, *, exc: Exception | None = None) -> FactorServiceError:
            logger.error(message, extra={"method": method}, exc_info=exc)
            return FactorServiceError(message)

        try:
            response = await self._client.request(method, self._service_url, **kwargs)
        except httpx.TimeoutException as exc:
            raise _transport_error(
                f"Factor service request timed out ({method}).",
                exc=exc,
            ) from exc
        except httpx.RequestError as exc:
            raise _transport_error(
                f"Factor service request failed ({method}): {exc!s}",
                exc=exc,
            ) from exc

        if response.is_error:
            snippet = response.text.strip()
            if len(snippet) > 512:
                snippet = f"{snippet[:512]}..."
            logger.warning(
                "Factor service responded with error",
                extra={"method": method, "status_code": response.status_code, "content": snippet},
            )
            raise FactorServiceError(
                f"Factor service error ({response.status_code}) during {method}: {snippet or 'no body provided.'}"
            )

        return response.text
