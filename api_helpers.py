"""
HTTP client factory for the DummyJSON suite.

create_client() returns a client bound to a base URL, default headers and a
timeout; create_authenticated_client() adds an "Authorization: Bearer" header.
Two interchangeable backends exist, "httpx" (default) and "requests", so the
same scenarios can be driven through either toolchain.

Clients never raise on 4xx/5xx: those come back as ApiResponse objects for
the test to assert on. Only network-level failures raise (TransportError),
after max_retries attempts.

Always release a client when done with it:

    with create_client() as client:
        resp = client.get(ENDPOINTS.products.single(1))
"""
import json
import time
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

import httpx
import requests
from requests.structures import CaseInsensitiveDict

import contracts
from endpoints import ENDPOINTS
from errors import HttpStatusError, TransportError
from logging_helper import log_status, status_for_code
from settings import get_settings

DEFAULT_BASE_URL = "https://dummyjson.com"
DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}
BACKENDS = ("httpx", "requests")

# demo accounts published by DummyJSON
DEMO_USERS = {
    "emilys": "emilyspass",
    "michaelw": "michaelwpass",
}


def get_base_url() -> str:
    return get_settings().base_url or DEFAULT_BASE_URL


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = field(default_factory=get_base_url)
    headers: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))
    timeout: float = field(default_factory=lambda: get_settings().timeout)
    token: Optional[str] = None
    max_retries: int = field(default_factory=lambda: get_settings().max_retries)
    retry_delay: float = 2.0
    backend: str = field(default_factory=lambda: get_settings().client_backend)

    def request_headers(self) -> Dict[str, str]:
        headers = dict(self.headers)
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers


@dataclass
class ApiResponse:
    method: str
    url: str
    status: int
    headers: CaseInsensitiveDict
    body: Any
    text: str
    elapsed_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.status < 400

    def raise_for_status(self) -> "ApiResponse":
        if not self.ok:
            raise HttpStatusError(self.method, self.url, self.status, self.body)
        return self


def _parse_body(text: str) -> Any:
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return None


class ApiClient:
    """
    Purpose:  Base request-issuing client. Subclasses only know how to send one
              request through their library; retries, logging, URL building and
              the transport/HTTP error split live here.

    How it works:
    - request() joins base_url + path, merges default + per-call headers
    - a transport exception is retried up to config.max_retries times, then
      raised as TransportError (so tests can tell "couldn't reach the server"
      from "the server said no")
    - any HTTP status, including 4xx/5xx, is returned as an ApiResponse
    """

    transport_errors: tuple = ()

    def __init__(self, config: ClientConfig):
        if config.max_retries < 1:
            raise ValueError(f"max_retries must be >= 1, got {config.max_retries}")
        self.config = config
        self.closed = False

    # -- lifecycle --------------------------------------------------------
    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        if self.closed:
            return
        self.closed = True
        self._close()

    def _close(self):
        raise NotImplementedError

    def _send(self, method: str, url: str, *, json, params, headers) -> ApiResponse:
        raise NotImplementedError

    # -- requests ---------------------------------------------------------
    def url_for(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def request(self, method: str, path: str, json: Any = None,
                params: Optional[Dict[str, Any]] = None,
                headers: Optional[Dict[str, str]] = None) -> ApiResponse:
        if self.closed:
            raise RuntimeError("Client is closed; create a new one with create_client()")

        method = method.upper()
        url = self.url_for(path)
        merged = self.config.request_headers()
        if headers:
            merged.update(headers)

        last_error = None
        max_retries = self.config.max_retries
        for attempt in range(1, max_retries + 1):
            started = time.perf_counter()
            try:
                response = self._send(method, url, json=json, params=params, headers=merged)
            except self.transport_errors as e:
                last_error = e
                log_status("warning", f"Attempt {attempt}: Request error with {method} {url}: ", repr(e))
                # Optional wait before retrying (only on request errors)
                if attempt < max_retries:
                    time.sleep(self.config.retry_delay)
                continue

            response.elapsed_ms = int((time.perf_counter() - started) * 1000)
            log_status(
                status_for_code(response.status),
                f"{method} {url} -> {response.status}",
                f" ({response.elapsed_ms} ms)",
            )
            return response

        log_status("error", f"Failed to make the request after {max_retries} attempts: ", f"{method} {url}")
        raise TransportError(method, url, max_retries, last_error) from last_error

    def get(self, path: str, params=None, headers=None) -> ApiResponse:
        return self.request("GET", path, params=params, headers=headers)

    def post(self, path: str, json=None, params=None, headers=None) -> ApiResponse:
        return self.request("POST", path, json=json, params=params, headers=headers)

    def put(self, path: str, json=None, params=None, headers=None) -> ApiResponse:
        return self.request("PUT", path, json=json, params=params, headers=headers)

    def patch(self, path: str, json=None, params=None, headers=None) -> ApiResponse:
        return self.request("PATCH", path, json=json, params=params, headers=headers)

    def delete(self, path: str, json=None, params=None, headers=None) -> ApiResponse:
        return self.request("DELETE", path, json=json, params=params, headers=headers)


class HttpxApiClient(ApiClient):
    transport_errors = (httpx.RequestError,)

    def __init__(self, config: ClientConfig):
        super().__init__(config)
        # Use httpx for better performance and session reuse
        self._client = httpx.Client(timeout=config.timeout)

    def _close(self):
        self._client.close()

    def _send(self, method, url, *, json, params, headers):
        resp = self._client.request(method, url, json=json, params=params, headers=headers)
        return ApiResponse(
            method=method,
            url=str(resp.url),
            status=resp.status_code,
            headers=CaseInsensitiveDict(resp.headers.items()),
            body=_parse_body(resp.text),
            text=resp.text,
        )


class RequestsApiClient(ApiClient):
    transport_errors = (requests.RequestException,)

    def __init__(self, config: ClientConfig):
        super().__init__(config)
        self._session = requests.Session()

    def _close(self):
        self._session.close()

    def _send(self, method, url, *, json, params, headers):
        resp = self._session.request(
            method, url, json=json, params=params, headers=headers, timeout=self.config.timeout
        )
        return ApiResponse(
            method=method,
            url=resp.url,
            status=resp.status_code,
            headers=CaseInsensitiveDict(resp.headers),
            body=_parse_body(resp.text),
            text=resp.text,
        )


_CLIENT_CLASSES = {
    "httpx": HttpxApiClient,
    "requests": RequestsApiClient,
}


def create_client(config: Optional[ClientConfig] = None, **overrides) -> ApiClient:
    config = replace(config or ClientConfig(), **overrides)
    try:
        client_class = _CLIENT_CLASSES[config.backend]
    except KeyError:
        raise ValueError(f"Unknown client backend {config.backend!r}; expected one of {BACKENDS}") from None
    return client_class(config)


def create_authenticated_client(token: str, config: Optional[ClientConfig] = None, **overrides) -> ApiClient:
    if not isinstance(token, str) or not token:
        raise ValueError("token must be a non-empty string")
    return create_client(config, token=token, **overrides)


def make_request(method, url, headers=None, params=None, json=None, max_retries=None, config=None):
    """One-shot request: opens a client, sends a single call, releases the client."""
    overrides = {}
    if max_retries is not None:
        overrides["max_retries"] = max_retries
    with create_client(config, **overrides) as client:
        return client.request(method, url, json=json, params=params, headers=headers)


# -----------------------------
# Auth helpers
# -----------------------------

def login(client: ApiClient, username=None, password=None, expires_in_mins=None) -> ApiResponse:
    """POST /auth/login with whichever credential fields are given."""
    payload = {}
    if username is not None:
        payload["username"] = username
    if password is not None:
        payload["password"] = password
    if expires_in_mins is not None:
        payload["expiresInMins"] = expires_in_mins
    return client.post(ENDPOINTS.auth.login, json=payload)


def authenticate(client: ApiClient, username: str, password: str) -> Dict[str, Any]:
    """
    Purpose:  Logs in and returns the validated login body (id, username,
              accessToken, refreshToken, ...). Used by scenarios that chain the
              token or the user id into follow-up calls.

    Raises: HttpStatusError if the login is rejected,
            SchemaValidationError if the body breaks the login contract.
    """
    resp = login(client, username, password).raise_for_status()
    return contracts.LOGIN_RESPONSE.parse(resp.body)
