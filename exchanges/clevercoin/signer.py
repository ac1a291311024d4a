"""HMAC-SHA256 request signing for private CleverCoin calls."""

from __future__ import annotations

import hashlib
import hmac
import time
from typing import Callable, Dict, Iterable, Mapping, Optional, Tuple
from urllib.parse import quote_plus, urlencode

from .models import Credentials, HttpMethod

HEADER_KEY = "X-Auth-Key"
HEADER_NONCE = "X-Auth-Nonce"
HEADER_REQUEST = "X-Auth-Request"
HEADER_SIGNATURE = "X-Auth-Signature"

AUTH_HEADERS = (HEADER_KEY, HEADER_NONCE, HEADER_SIGNATURE)


def _quote_form(value, safe="", encoding=None, errors=None) -> str:
    # quote_plus leaves "~" bare, the API form-encodes it as %7E
    return quote_plus(value, safe=safe, encoding=encoding, errors=errors).replace("~", "%7E")


def form_encode(items: Iterable[Tuple[str, str]]) -> str:
    """URL form-encode key/value pairs in the given order."""
    return urlencode(list(items), quote_via=_quote_form)


def make_nonce(clock: Callable[[], int] = time.time_ns) -> str:
    """Return ``<seconds><6 fractional digits>`` for the given nanosecond clock.

    The value increases with the wall clock at microsecond granularity. A clock
    that steps backwards produces a smaller nonce, which the API rejects.
    """
    now_ns = clock()
    seconds, remainder_ns = divmod(now_ns, 1_000_000_000)
    micros = remainder_ns // 1000
    return f"{seconds}{micros:06d}"


def build_signature_payload(headers: Mapping[str, str], method: HttpMethod, path: str, body_params: Mapping[str, str]) -> str:
    merged: Dict[str, str] = dict(headers)
    merged[HEADER_REQUEST] = f"{method.value} {path}"
    # headers win over body fields with the same name
    for key, value in body_params.items():
        merged.setdefault(key, value)
    return form_encode(sorted(merged.items()))


def compute_signature(secret: str, payload: str) -> str:
    return hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).hexdigest()


class Signer:
    """Builds the authentication headers for one private request."""

    def __init__(self, credentials: Credentials, *, clock: Callable[[], int] = time.time_ns) -> None:
        self.credentials = credentials
        self.clock = clock

    def sign(
        self,
        method: HttpMethod,
        path: str,
        body_params: Optional[Mapping[str, str]] = None,
        *,
        nonce: Optional[str] = None,
    ) -> Dict[str, str]:
        headers = {
            HEADER_KEY: self.credentials.api_key,
            HEADER_NONCE: nonce if nonce is not None else make_nonce(self.clock),
        }
        payload = build_signature_payload(headers, method, path, body_params or {})
        headers[HEADER_SIGNATURE] = compute_signature(self.credentials.api_secret, payload)
        return headers
