"""Excepciones del cliente.

Conjunto cerrado de fallos visibles para el llamador:

- ArachnioTransportError: la petición no llegó a completarse (red, timeout) o
  la respuesta 200 no se pudo decodificar.
- ForbiddenError / InvalidArgumentError / InternalServerError /
  UnrecognizedStatusError: el servicio respondió con un status distinto de 200.
"""

from __future__ import annotations


class ArachnioError(Exception):
    """Base exception for every error raised by the client."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.status_code = status_code


# --- I/O: nothing usable came back ---

class ArachnioTransportError(ArachnioError):
    """The request could not be sent or the response could not be read."""


class RequestCanceledError(ArachnioTransportError):
    """The outgoing call was abandoned because its deadline expired."""


class ResponseDecodingError(ArachnioTransportError):
    """A 200 response whose body does not match the expected model."""


# --- HTTP status mapping ---

class ForbiddenError(ArachnioError):
    """403: the API key is invalid, revoked, or the plan does not cover the call."""

    def __init__(self, *, path: str | None = None) -> None:
        super().__init__("forbidden", path=path, status_code=403)


class InvalidArgumentError(ArachnioError, ValueError):
    """400 or 422: the service rejected the request payload."""


class InternalServerError(ArachnioError):
    """500: the remote service failed, not the caller."""

    def __init__(self, *, path: str | None = None) -> None:
        super().__init__("internal error", path=path, status_code=500)


class UnrecognizedStatusError(ArachnioError):
    def __init__(self, status_code: int, *, path: str | None = None) -> None:
        super().__init__(
            f"unrecognized failure {status_code}",
            path=path,
            status_code=status_code,
        )
