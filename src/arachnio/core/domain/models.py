"""Modelos del dominio (Pydantic v2).

Peticiones y respuestas de la API tal como viajan por el cable (JSON camelCase).

Nota:
- Todos los modelos son inmutables (`frozen=True`) e ignoran campos
  desconocidos, así una versión nueva del servicio no rompe clientes viejos.
- Se construyen con nombres Python (`registry_suffix=...`) o con los alias del
  cable (`registrySuffix=...`).
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Iterable, Literal, Optional, Union

from pydantic import BaseModel, Discriminator, Field, Tag
from pydantic.config import ConfigDict


class ArachnioModel(BaseModel):
    """Base de todos los DTOs del cliente."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    def to_json(self) -> str:
        """Serializa con los nombres del cable, omitiendo campos vacíos."""

        return self.model_dump_json(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Peticiones
# ---------------------------------------------------------------------------


class DomainName(ArachnioModel):
    hostname: str = Field(..., description="Hostname a descomponer (p.ej. 'www.google.com').")

    @classmethod
    def of(cls, value: str | DomainName) -> DomainName:
        if isinstance(value, cls):
            return value
        return cls(hostname=value)


class DomainNameBatchEntry(ArachnioModel):
    hostname: str

    @classmethod
    def of(cls, value: str | DomainNameBatchEntry) -> DomainNameBatchEntry:
        if isinstance(value, cls):
            return value
        return cls(hostname=value)


class DomainNameBatch(ArachnioModel):
    entries: list[DomainNameBatchEntry] = Field(
        default_factory=list,
        description="Hostnames en el orden en que deben volver los resultados.",
    )

    @classmethod
    def of(
        cls,
        value: DomainNameBatch | Iterable[DomainNameBatchEntry | str],
    ) -> DomainNameBatch:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            raise TypeError("expected an iterable of hostnames, not a single string")
        return cls(entries=[DomainNameBatchEntry.of(v) for v in value])


class Link(ArachnioModel):
    url: str = Field(..., description="URL absoluta a analizar.")

    @classmethod
    def of(cls, value: str | Link) -> Link:
        if isinstance(value, cls):
            return value
        return cls(url=value)


class LinkBatchEntry(ArachnioModel):
    url: str

    @classmethod
    def of(cls, value: str | LinkBatchEntry) -> LinkBatchEntry:
        if isinstance(value, cls):
            return value
        return cls(url=value)


class LinkBatch(ArachnioModel):
    entries: list[LinkBatchEntry] = Field(
        default_factory=list,
        description="URLs en el orden en que deben volver los resultados.",
    )

    @classmethod
    def of(cls, value: LinkBatch | Iterable[LinkBatchEntry | str]) -> LinkBatch:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            raise TypeError("expected an iterable of links, not a single string")
        return cls(entries=[LinkBatchEntry.of(v) for v in value])


# ---------------------------------------------------------------------------
# Dominios
# ---------------------------------------------------------------------------


class ParsedDomainName(ArachnioModel):
    """Descomposición de un hostname según la Public Suffix List."""

    registry_suffix: str | None = Field(
        default=None,
        alias="registrySuffix",
        description="Sufijo gestionado por un registro (p.ej. 'com', 'co.uk').",
    )
    public_suffix: str | None = Field(
        default=None,
        alias="publicSuffix",
        description="Dominio registrable (p.ej. 'google.com').",
    )
    hostname: str = Field(..., description="Hostname normalizado.")


# ---------------------------------------------------------------------------
# Links
# ---------------------------------------------------------------------------


class Scheme(str, Enum):
    HTTP = "http"
    HTTPS = "https"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> "Scheme":
        return cls.UNKNOWN


class DomainNameHost(ArachnioModel):
    type: Literal["domain"] = "domain"
    domain: ParsedDomainName


class Ipv4Host(ArachnioModel):
    type: Literal["ipv4"] = "ipv4"
    ipv4: str


class Ipv6Host(ArachnioModel):
    type: Literal["ipv6"] = "ipv6"
    ipv6: str


class UnknownHost(ArachnioModel):
    """Host de un tipo que este cliente todavía no conoce."""

    model_config = ConfigDict(extra="allow")

    type: str


_KNOWN_HOST_TYPES = ("domain", "ipv4", "ipv6")


def _host_tag(value: Any) -> str:
    kind = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    return kind if kind in _KNOWN_HOST_TYPES else "unknown"


Host = Annotated[
    Union[
        Annotated[DomainNameHost, Tag("domain")],
        Annotated[Ipv4Host, Tag("ipv4")],
        Annotated[Ipv6Host, Tag("ipv6")],
        Annotated[UnknownHost, Tag("unknown")],
    ],
    Discriminator(_host_tag),
]


class Authority(ArachnioModel):
    host: Host
    port: int | None = None


class QueryParameter(ArachnioModel):
    name: str
    value: str | None = None


class ParsedLink(ArachnioModel):
    """URL descompuesta por el servicio."""

    link: str = Field(..., description="URL tal como la normalizó el servicio.")
    scheme: Scheme
    authority: Authority
    path: str | None = None
    query_parameters: list[QueryParameter] = Field(
        default_factory=list,
        alias="queryParameters",
        description="Parámetros de query en orden de aparición.",
    )


class UnwindingOutcome(str, Enum):
    """Cómo terminó el seguimiento de redirecciones."""

    SUCCESS2XX = "success2xx"
    REDIRECT_LOOP = "redirectLoop"
    TOO_MANY_REDIRECTS = "tooManyRedirects"
    CLIENT_ERROR4XX = "clientError4xx"
    SERVER_ERROR5XX = "serverError5xx"
    NETWORK_ERROR = "networkError"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> "UnwindingOutcome":
        return cls.UNKNOWN


class UnwoundLink(ArachnioModel):
    original: ParsedLink
    unwound: ParsedLink | None = Field(
        default=None,
        description="Destino final tras seguir redirecciones (ausente si falló).",
    )
    outcome: UnwindingOutcome
    canonical: bool = Field(
        default=False,
        description="True si `unwound` es la URL canónica declarada por la página.",
    )


# ---------------------------------------------------------------------------
# Extracción de entidades
# ---------------------------------------------------------------------------


class ImageMetadata(ArachnioModel):
    url: str
    width: int | None = None
    height: int | None = None


class Hyperlink(ArachnioModel):
    href: ParsedLink
    rel: str | None = None
    outlink: bool | None = Field(
        default=None,
        description="True si el enlace apunta fuera del sitio de la página.",
    )
    anchor_text: str | None = Field(default=None, alias="anchorText")


class WebpageEntityMetadata(ArachnioModel):
    entity_type: Literal["webpage"] = Field(default="webpage", alias="entityType")
    webpage_type: str = Field(..., alias="webpageType")
    title: str | None = None
    thumbnail: ImageMetadata | None = None
    description: str | None = None


class ArticleWebpageEntityMetadata(WebpageEntityMetadata):
    webpage_type: Literal["article"] = Field(default="article", alias="webpageType")
    keywords: list[str] | None = None
    author: str | None = None
    published_at: datetime | None = Field(default=None, alias="publishedAt")
    modified_at: datetime | None = Field(default=None, alias="modifiedAt")
    body_html: str | None = Field(default=None, alias="bodyHtml")
    body_text: str | None = Field(default=None, alias="bodyText")
    body_links: list[Hyperlink] | None = Field(
        default=None,
        alias="bodyLinks",
        description="Enlaces encontrados en el cuerpo del artículo, en orden.",
    )


class UnknownEntityMetadata(ArachnioModel):
    """Entidad de un tipo que este cliente todavía no conoce (campos crudos en extras)."""

    model_config = ConfigDict(extra="allow")

    entity_type: str = Field(..., alias="entityType")


def _entity_tag(value: Any) -> str:
    if isinstance(value, dict):
        entity_type = value.get("entityType", value.get("entity_type"))
        webpage_type = value.get("webpageType", value.get("webpage_type"))
    else:
        entity_type = getattr(value, "entity_type", None)
        webpage_type = getattr(value, "webpage_type", None)

    if entity_type == "webpage":
        return "article" if webpage_type == "article" else "webpage"
    return "unknown"


EntityMetadata = Annotated[
    Union[
        Annotated[ArticleWebpageEntityMetadata, Tag("article")],
        Annotated[WebpageEntityMetadata, Tag("webpage")],
        Annotated[UnknownEntityMetadata, Tag("unknown")],
    ],
    Discriminator(_entity_tag),
]


class ExtractedLink(ArachnioModel):
    link: UnwoundLink
    entity: Optional[EntityMetadata] = None


# ---------------------------------------------------------------------------
# Batches
# ---------------------------------------------------------------------------


class BatchEntryError(ArachnioModel):
    """Fallo de una entrada concreta dentro de un batch que sí respondió 200."""

    code: str | None = None
    message: str | None = None


class _BatchResultEntry(ArachnioModel):
    error: BatchEntryError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and getattr(self, "result", None) is not None


class ParsedDomainNameBatchEntry(_BatchResultEntry):
    result: ParsedDomainName | None = None


class ParsedDomainNameBatch(ArachnioModel):
    entries: list[ParsedDomainNameBatchEntry] = Field(default_factory=list)


class ParsedLinkBatchEntry(_BatchResultEntry):
    result: ParsedLink | None = None


class ParsedLinkBatch(ArachnioModel):
    entries: list[ParsedLinkBatchEntry] = Field(default_factory=list)


class UnwoundLinkBatchEntry(_BatchResultEntry):
    result: UnwoundLink | None = None


class UnwoundLinkBatch(ArachnioModel):
    entries: list[UnwoundLinkBatchEntry] = Field(default_factory=list)
