"""CleverCoin REST client with HMAC-signed private calls."""

from .errors import ApiError, CleverApiError, ProtocolError, TransportError, ValidationError
from .http_client import CleverHttpClient
from .models import CallSpec, Credentials, HttpMethod, OrderBook, PreparedRequest, Ticker, Visibility
from .service import CleverCoinService
from .signer import Signer, make_nonce

__all__ = [
    "ApiError",
    "CallSpec",
    "CleverApiError",
    "CleverCoinService",
    "CleverHttpClient",
    "Credentials",
    "HttpMethod",
    "OrderBook",
    "PreparedRequest",
    "ProtocolError",
    "Signer",
    "Ticker",
    "TransportError",
    "ValidationError",
    "Visibility",
    "make_nonce",
]
