from __future__ import annotations

import json
import threading
import time
from typing import Any, Dict, Mapping, Optional

import requests

from core.logger import mask_secret

from .errors import ApiError, ProtocolError, TransportError, ValidationError
from .models import CallSpec, Credentials, HttpMethod, PreparedRequest, Visibility
from .signer import Signer, form_encode

DEFAULT_BASE_URL = "https://api.clevercoin.com"
DEFAULT_TIMEOUT = 10
API_VERSION = "v1"
USER_AGENT = "CleverApiClient v1.0"


class CleverHttpClient:
    """Executes public and signed private calls against the CleverCoin REST API.

    The underlying ``requests.Session`` lives as long as the client; call
    :meth:`close` (or use the client as a context manager) to release it.
    """

    def __init__(
        self,
        api_key: str = "",
        api_secret: str = "",
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        verify_certificate: bool = True,
        clock=time.time_ns,
        session: Optional[requests.Session] = None,
        logger=None,
    ) -> None:
        self.credentials = Credentials(str(api_key), str(api_secret))
        self.base_url = base_url.rstrip("/")
        self.signer = Signer(self.credentials, clock=clock)
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})
        self.logger = logger
        self.last_latency_ms: float | None = None
        self._lock = threading.Lock()
        self._closed = False
        self.set_certificate_verification(verify_certificate)
        self.set_timeout(timeout)

    def _log(self, level: str, message: str, *args: Any) -> None:
        if self.logger:
            getattr(self.logger, level)(message, *args)

    def __enter__(self) -> "CleverHttpClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.session.close()

    def set_certificate_verification(self, verify: bool) -> None:
        """Never disable verification outside of test environments."""
        self.verify_certificate = bool(verify)
        if not self.verify_certificate:
            self._log("warning", "TLS certificate verification disabled for %s", self.base_url)

    def set_timeout(self, timeout: float) -> None:
        if timeout <= 0:
            raise ValidationError("Timeout must be a positive number of seconds.")
        # connect and per-read limits for requests; total_timeout bounds the whole transfer
        self.timeout = (timeout, timeout)
        self.total_timeout = timeout

    def describe(self) -> str:
        if not self.credentials.has_keys:
            return f"CleverCoin client at {self.base_url} (public only)"
        return f"CleverCoin client at {self.base_url} (key: {mask_secret(self.credentials.api_key)})"

    # Request building
    @staticmethod
    def _coerce_visibility(visibility) -> Visibility:
        if isinstance(visibility, Visibility):
            return visibility
        raise ValidationError("Call type must be public or private.")

    @staticmethod
    def _coerce_method(method) -> HttpMethod:
        if isinstance(method, HttpMethod):
            return method
        if isinstance(method, str):
            try:
                return HttpMethod(method)
            except ValueError:
                pass
        raise ValidationError("Unsupported HTTP method.")

    def build_request(
        self,
        visibility: Visibility,
        method: HttpMethod | str,
        name: str,
        query_params: Optional[Mapping[str, str]] = None,
        body_params: Optional[Mapping[str, str]] = None,
        *,
        nonce: Optional[str] = None,
    ) -> PreparedRequest:
        visibility = self._coerce_visibility(visibility)
        method = self._coerce_method(method)
        query_params = query_params or {}
        body_params = body_params or {}
        if method is HttpMethod.GET and body_params:
            raise ValidationError("You cannot use body parameters with a GET method.")

        path = f"/{API_VERSION}/{name}"
        if query_params:
            path = f"{path}?{form_encode(query_params.items())}"

        headers: Dict[str, str] = {}
        if visibility is Visibility.PRIVATE:
            headers = self.signer.sign(method, path, body_params, nonce=nonce)

        body = None
        if body_params:
            body = form_encode(body_params.items())
            headers["Content-Type"] = "application/x-www-form-urlencoded"
        return PreparedRequest(method=method, path=path, headers=headers, body=body)

    # Execution
    def execute(
        self,
        visibility: Visibility,
        method: HttpMethod | str,
        name: str,
        query_params: Optional[Mapping[str, str]] = None,
        body_params: Optional[Mapping[str, str]] = None,
    ) -> Dict:
        if self._closed:
            raise ValidationError("Client is closed.")
        # signing and dispatch share the lock so concurrent nonces stay ordered
        with self._lock:
            request = self.build_request(visibility, method, name, query_params, body_params)
            status, text = self._dispatch(request)
        return self.classify_response(status, text)

    def execute_spec(self, spec: CallSpec) -> Dict:
        return self.execute(spec.visibility, spec.method, spec.name, spec.query_params, spec.body_params)

    def _dispatch(self, request: PreparedRequest) -> tuple[int, str]:
        url = f"{self.base_url}{request.path}"
        start = time.monotonic()
        deadline = start + self.total_timeout
        try:
            response = self.session.request(
                request.method.value,
                url,
                headers=request.headers,
                data=request.body,
                timeout=self.timeout,
                verify=self.verify_certificate,
                allow_redirects=False,
                stream=True,
            )
            try:
                content = self._read_body(response, deadline)
            finally:
                response.close()
        except requests.RequestException as exc:
            code = type(exc).__name__
            raise TransportError(f"HTTP transport error #{code}: {exc}", code=code) from exc
        self.last_latency_ms = (time.monotonic() - start) * 1000
        self._log(
            "debug",
            "%s %s -> %s (%.0fms)",
            request.method.value,
            request.path,
            response.status_code,
            self.last_latency_ms,
        )
        return response.status_code, content.decode(response.encoding or "utf-8", errors="replace")

    def _read_body(self, response: requests.Response, deadline: float) -> bytes:
        chunks = []
        for chunk in response.iter_content(chunk_size=8192):
            chunks.append(chunk)
            self._check_deadline(deadline)
        self._check_deadline(deadline)
        return b"".join(chunks)

    def _check_deadline(self, deadline: float) -> None:
        if time.monotonic() > deadline:
            raise TransportError(
                f"HTTP transport error #Timeout: transfer exceeded {self.total_timeout}s",
                code="Timeout",
            )

    @staticmethod
    def classify_response(status: int, text: str) -> Dict:
        try:
            parsed = json.loads(text)
        except (TypeError, ValueError):
            parsed = None
        if not isinstance(parsed, dict):
            parsed = None

        if status != 200:
            if parsed is not None and "error" in parsed:
                raise ApiError(status, str(parsed["error"]))
            raise ApiError(status, text)
        if parsed is None:
            raise ProtocolError(f"response is not valid JSON object: {text}", body=text)
        return parsed
