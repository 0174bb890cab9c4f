"""Cliente HTTP de la API Arachnio.

Responsabilidad:
- Serializar la petición, hacer POST a la ruta fija de la operación con la API
  key en un header y mapear el status HTTP a un resultado tipado o a una
  excepción de `arachnio.core.errors`.

Las siete operaciones comparten un único camino (`_execute`); solo cambian la
ruta, el modelo de respuesta y el mensaje de argumento inválido (`Endpoint`).

Suscripción: https://developer.arachn.io/
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, TypeVar

import httpx
from pydantic import ValidationError

from arachnio.adapters.http_client import build_async_client, build_client
from arachnio.core.config import API_KEY_HEADER_NAME, ArachnioSettings
from arachnio.core.domain.models import (
    ArachnioModel,
    DomainName,
    DomainNameBatch,
    DomainNameBatchEntry,
    ExtractedLink,
    Link,
    LinkBatch,
    LinkBatchEntry,
    ParsedDomainName,
    ParsedDomainNameBatch,
    ParsedLink,
    ParsedLinkBatch,
    UnwoundLink,
    UnwoundLinkBatch,
)
from arachnio.core.errors import (
    ArachnioError,
    ArachnioTransportError,
    ForbiddenError,
    InternalServerError,
    InvalidArgumentError,
    RequestCanceledError,
    ResponseDecodingError,
    UnrecognizedStatusError,
)
from arachnio.core.interfaces.client import ArachnioClient
from arachnio.core.logger import get_module_logger

logger = get_module_logger("client")

ResponseT = TypeVar("ResponseT", bound=ArachnioModel)


@dataclass(frozen=True)
class Endpoint(Generic[ResponseT]):
    path: str
    response_model: type[ResponseT]
    invalid_message: str


PARSE_DOMAIN_NAME = Endpoint("/domains/parse", ParsedDomainName, "invalid domain name")
PARSE_DOMAIN_NAME_BATCH = Endpoint(
    "/domains/parse/batch", ParsedDomainNameBatch, "invalid domain name batch"
)
EXTRACT_LINK = Endpoint("/links/extract", ExtractedLink, "invalid link")
PARSE_LINK = Endpoint("/links/parse", ParsedLink, "invalid link")
PARSE_LINK_BATCH = Endpoint("/links/parse/batch", ParsedLinkBatch, "invalid link batch")
UNWIND_LINK = Endpoint("/links/unwind", UnwoundLink, "invalid link")
UNWIND_LINK_BATCH = Endpoint("/links/unwind/batch", UnwoundLinkBatch, "invalid link batch")

ENDPOINTS: tuple[Endpoint, ...] = (
    PARSE_DOMAIN_NAME,
    PARSE_DOMAIN_NAME_BATCH,
    EXTRACT_LINK,
    PARSE_LINK,
    PARSE_LINK_BATCH,
    UNWIND_LINK,
    UNWIND_LINK_BATCH,
)


def _status_error(endpoint: Endpoint, status_code: int) -> ArachnioError:
    if status_code == 403:
        return ForbiddenError(path=endpoint.path)
    if status_code in (400, 422):
        return InvalidArgumentError(
            endpoint.invalid_message,
            path=endpoint.path,
            status_code=status_code,
        )
    if status_code == 500:
        return InternalServerError(path=endpoint.path)
    return UnrecognizedStatusError(status_code, path=endpoint.path)


class _ArachnioClientBase:
    """Estado inmutable y mapeo petición/respuesta compartidos por ambos clientes."""

    def __init__(
        self,
        base_url: str | None,
        api_key: str | None,
        *,
        api_key_header: str = API_KEY_HEADER_NAME,
    ) -> None:
        if not base_url:
            raise ValueError("base_url is required")
        if not api_key:
            raise ValueError("api_key is required")

        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._api_key_header = api_key_header

    @property
    def base_url(self) -> str:
        return self._base_url

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self._base_url!r})"

    def _build_request(
        self,
        http: httpx.Client | httpx.AsyncClient,
        endpoint: Endpoint,
        payload: ArachnioModel,
    ) -> httpx.Request:
        return http.build_request(
            "POST",
            f"{self._base_url}{endpoint.path}",
            content=payload.to_json().encode("utf-8"),
            headers={
                self._api_key_header: self._api_key,
                "Content-Type": "application/json",
            },
        )

    def _transport_error(self, endpoint: Endpoint, exc: httpx.HTTPError) -> ArachnioError:
        if isinstance(exc, httpx.TimeoutException):
            logger.warning("POST %s timed out", endpoint.path)
            return RequestCanceledError("request timed out", path=endpoint.path)
        logger.warning("POST %s failed: %s", endpoint.path, exc)
        return ArachnioTransportError(f"request failed: {exc}", path=endpoint.path)

    def _handle_response(self, endpoint: Endpoint[ResponseT], response: httpx.Response) -> ResponseT:
        status_code = response.status_code
        logger.debug("POST %s -> %s", endpoint.path, status_code)

        if status_code != 200:
            error = _status_error(endpoint, status_code)
            logger.warning("POST %s rejected: %s", endpoint.path, error.message)
            raise error

        try:
            return endpoint.response_model.model_validate_json(response.content)
        except ValidationError as exc:
            logger.warning(
                "POST %s returned an unexpected body (%d errors)",
                endpoint.path,
                exc.error_count(),
            )
            raise ResponseDecodingError(
                "failed to deserialize response",
                path=endpoint.path,
                status_code=status_code,
            ) from exc


class DefaultArachnioClient(_ArachnioClientBase, ArachnioClient):
    """Cliente síncrono: una petición bloqueante por operación.

    Seguro para uso concurrente desde varios hilos; el `httpx.Client` es el
    único recurso compartido. Un cliente inyectado no se cierra aquí.
    """

    def __init__(
        self,
        base_url: str | None,
        api_key: str | None,
        *,
        client: httpx.Client | None = None,
        api_key_header: str = API_KEY_HEADER_NAME,
        settings: ArachnioSettings | None = None,
    ) -> None:
        super().__init__(base_url, api_key, api_key_header=api_key_header)
        self._owns_client = client is None
        self._client = client if client is not None else build_client(settings)

    @classmethod
    def from_settings(
        cls,
        settings: ArachnioSettings | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> DefaultArachnioClient:
        settings = settings or ArachnioSettings()
        return cls(
            settings.base_url,
            settings.api_key,
            client=client,
            api_key_header=settings.api_key_header,
            settings=settings,
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> DefaultArachnioClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _execute(self, endpoint: Endpoint[ResponseT], payload: ArachnioModel) -> ResponseT:
        request = self._build_request(self._client, endpoint, payload)
        try:
            response = self._client.send(request)
        except httpx.HTTPError as exc:
            raise self._transport_error(endpoint, exc) from exc
        return self._handle_response(endpoint, response)

    def parse_domain_name(self, domain_name: str | DomainName) -> ParsedDomainName:
        return self._execute(PARSE_DOMAIN_NAME, DomainName.of(domain_name))

    def parse_domain_name_batch(
        self,
        batch: DomainNameBatch | Iterable[DomainNameBatchEntry | str],
    ) -> ParsedDomainNameBatch:
        return self._execute(PARSE_DOMAIN_NAME_BATCH, DomainNameBatch.of(batch))

    def extract_link(self, link: str | Link) -> ExtractedLink:
        return self._execute(EXTRACT_LINK, Link.of(link))

    def parse_link(self, link: str | Link) -> ParsedLink:
        return self._execute(PARSE_LINK, Link.of(link))

    def parse_link_batch(
        self,
        batch: LinkBatch | Iterable[LinkBatchEntry | str],
    ) -> ParsedLinkBatch:
        return self._execute(PARSE_LINK_BATCH, LinkBatch.of(batch))

    def unwind_link(self, link: str | Link) -> UnwoundLink:
        return self._execute(UNWIND_LINK, Link.of(link))

    def unwind_link_batch(
        self,
        batch: LinkBatch | Iterable[LinkBatchEntry | str],
    ) -> UnwoundLinkBatch:
        return self._execute(UNWIND_LINK_BATCH, LinkBatch.of(batch))


class AsyncArachnioClient(_ArachnioClientBase):
    """Gemelo asíncrono de `DefaultArachnioClient`.

    La cancelación de la tarea (`asyncio.CancelledError`) se propaga tal cual.
    """

    def __init__(
        self,
        base_url: str | None,
        api_key: str | None,
        *,
        client: httpx.AsyncClient | None = None,
        api_key_header: str = API_KEY_HEADER_NAME,
        settings: ArachnioSettings | None = None,
    ) -> None:
        super().__init__(base_url, api_key, api_key_header=api_key_header)
        self._owns_client = client is None
        self._client = client if client is not None else build_async_client(settings)

    @classmethod
    def from_settings(
        cls,
        settings: ArachnioSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> AsyncArachnioClient:
        settings = settings or ArachnioSettings()
        return cls(
            settings.base_url,
            settings.api_key,
            client=client,
            api_key_header=settings.api_key_header,
            settings=settings,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> AsyncArachnioClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _execute(self, endpoint: Endpoint[ResponseT], payload: ArachnioModel) -> ResponseT:
        request = self._build_request(self._client, endpoint, payload)
        try:
            response = await self._client.send(request)
        except httpx.HTTPError as exc:
            raise self._transport_error(endpoint, exc) from exc
        return self._handle_response(endpoint, response)

    async def parse_domain_name(self, domain_name: str | DomainName) -> ParsedDomainName:
        return await self._execute(PARSE_DOMAIN_NAME, DomainName.of(domain_name))

    async def parse_domain_name_batch(
        self,
        batch: DomainNameBatch | Iterable[DomainNameBatchEntry | str],
    ) -> ParsedDomainNameBatch:
        return await self._execute(PARSE_DOMAIN_NAME_BATCH, DomainNameBatch.of(batch))

    async def extract_link(self, link: str | Link) -> ExtractedLink:
        return await self._execute(EXTRACT_LINK, Link.of(link))

    async def parse_link(self, link: str | Link) -> ParsedLink:
        return await self._execute(PARSE_LINK, Link.of(link))

    async def parse_link_batch(
        self,
        batch: LinkBatch | Iterable[LinkBatchEntry | str],
    ) -> ParsedLinkBatch:
        return await self._execute(PARSE_LINK_BATCH, LinkBatch.of(batch))

    async def unwind_link(self, link: str | Link) -> UnwoundLink:
        return await self._execute(UNWIND_LINK, Link.of(link))

    async def unwind_link_batch(
        self,
        batch: LinkBatch | Iterable[LinkBatchEntry | str],
    ) -> UnwoundLinkBatch:
        return await self._execute(UNWIND_LINK_BATCH, LinkBatch.of(batch))
