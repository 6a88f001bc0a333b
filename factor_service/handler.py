"""Request processing for the findFactors operation."""

import logging
from dataclasses import dataclass

from factor_service.descriptor import build_descriptor
from factor_service.envelope import (
    EnvelopeDecodeError,
    decode_request,
    encode_fault,
    encode_response,
    format_result,
)
from factor_service.factors import ZeroDivisorError, filter_factors
from factor_service.settings import Settings

logger = logging.getLogger(__name__)

ZERO_DIVISOR_MESSAGE = "Division by zero: divisor must be a non-zero integer."


@dataclass(frozen=True, slots=True)
class FactorServiceHandler:
    """
    Stateless handler shared by every request.

    All per-request data stays in locals; the only field is the descriptor,
    rendered once at construction.
    """

    descriptor: bytes

    @classmethod
    def from_settings(cls, settings: Settings) -> "FactorServiceHandler":
        """Factory that renders the descriptor for the configured address."""
        return cls(descriptor=build_descriptor(settings.service_url))

    def describe(self) -> bytes:
        """Return the descriptor document served on GET."""
        return self.descriptor

    def process(self, body: str) -> str:
        """Turn a request body into a success or fault envelope."""
        logger.debug("Received findFactors request", extra={"body_length": len(body)})
        try:
            request = decode_request(body)
            factors = filter_factors(request.numbers, request.divisor)
        except ZeroDivisorError:
            logger.warning("Rejected request with zero divisor")
            return encode_fault(ZERO_DIVISOR_MESSAGE)
        except EnvelopeDecodeError as exc:
            logger.warning("Could not decode request: %s", exc)
            return encode_fault(f"Error processing request: {exc}")
        except Exception as exc:  # noqa: BLE001
            logger.exception("findFactors failed unexpectedly")
            return encode_fault(f"Error processing request: {exc}")

        logger.debug(
            "findFactors succeeded",
            extra={"count": len(request.numbers), "divisor": request.divisor, "matches": len(factors)},
        )
        return encode_response(format_result(factors))
