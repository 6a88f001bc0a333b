"""
Factor service package.

Envelope codec, divisibility filter, request handler and HTTP bootstrap for
the findFactors XML-over-HTTP service, plus a client for calling it.
"""

from factor_service.client import FactorServiceClient, FactorServiceError, FactorServiceFault
from factor_service.factors import ZeroDivisorError, filter_factors

__all__ = [
    "FactorServiceClient",
    "FactorServiceError",
    "FactorServiceFault",
    "ZeroDivisorError",
    "filter_factors",
]
