"""
Error taxonomy for the suite.

- TransportError: the request never got an answer (timeout, DNS, refused).
- HttpStatusError: the server answered with 4xx/5xx. Only raised on request
  via ApiResponse.raise_for_status(); clients return these responses as-is.
- SchemaValidationError: a body did not satisfy its contract.
"""
from typing import Any, List, Optional


class ApiError(Exception):
    """Base class for every error raised by the suite's helpers."""


class TransportError(ApiError):
    def __init__(self, method: str, url: str, attempts: int, cause: Optional[BaseException] = None):
        self.method = method.upper()
        self.url = url
        self.attempts = attempts
        self.cause = cause
        super().__init__(
            f"{self.method} {url} failed after {attempts} attempt(s): "
            f"{type(cause).__name__ if cause else 'error'}: {cause}"
        )


class HttpStatusError(ApiError):
    def __init__(self, method: str, url: str, status: int, body: Any = None):
        self.method = method.upper()
        self.url = url
        self.status = status
        self.body = body
        super().__init__(f"{self.method} {url} returned HTTP {status}. Body: {body}")


class SchemaValidationError(ApiError):
    def __init__(self, contract: str, errors: List[Any]):
        self.contract = contract
        self.errors = list(errors)
        details = "\n".join(f"  - {e}" for e in self.errors)
        super().__init__(f"Response does not match '{contract}' contract:\n{details}")
