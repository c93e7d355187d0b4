# stayease/clients/__init__.py
from .api import StayEaseClient
from .base import ApiError, ApiTransportError

__all__ = [
    "ApiError",
    "ApiTransportError",
    "StayEaseClient",
]
