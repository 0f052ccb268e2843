"""Prediction API transport - all HTTP I/O lives here."""

from strength_compass.integrations.predictor.client import ApiClient
from strength_compass.integrations.predictor.tokens import TokenStore

__all__ = [
    "ApiClient",
    "TokenStore",
]
