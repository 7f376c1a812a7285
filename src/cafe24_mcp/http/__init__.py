"""Outbound HTTP: request building and transport."""

from cafe24_mcp.http.base import ApiResult, CallDescriptor, Failure, Success
from cafe24_mcp.http.builder import SHOP_HEADER, build
from cafe24_mcp.http.transport import TransportClient, base_url_for

__all__ = [
    "SHOP_HEADER",
    "ApiResult",
    "CallDescriptor",
    "Failure",
    "Success",
    "TransportClient",
    "base_url_for",
    "build",
]
