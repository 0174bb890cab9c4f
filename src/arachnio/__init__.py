"""Cliente tipado para la API de Arachnio.

Uso básico:

    from arachnio import DefaultArachnioClient

    with DefaultArachnioClient(FREE_PLAN_BASE_URL, api_key) as client:
        parsed = client.parse_domain_name("www.google.com")
"""

from __future__ import annotations

import logging

from arachnio.adapters.arachnio_client import AsyncArachnioClient, DefaultArachnioClient
from arachnio.core.config import API_KEY_HEADER_NAME, FREE_PLAN_BASE_URL, ArachnioSettings
from arachnio.core.domain.models import (
    ArticleWebpageEntityMetadata,
    Authority,
    BatchEntryError,
    DomainName,
    DomainNameBatch,
    DomainNameBatchEntry,
    DomainNameHost,
    ExtractedLink,
    Hyperlink,
    ImageMetadata,
    Ipv4Host,
    Ipv6Host,
    Link,
    LinkBatch,
    LinkBatchEntry,
    ParsedDomainName,
    ParsedDomainNameBatch,
    ParsedDomainNameBatchEntry,
    ParsedLink,
    ParsedLinkBatch,
    ParsedLinkBatchEntry,
    QueryParameter,
    Scheme,
    UnknownEntityMetadata,
    UnknownHost,
    UnwindingOutcome,
    UnwoundLink,
    UnwoundLinkBatch,
    UnwoundLinkBatchEntry,
    WebpageEntityMetadata,
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

# Sin handlers propios hasta que la aplicación llame a setup_logger.
logging.getLogger("arachnio").addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "API_KEY_HEADER_NAME",
    "FREE_PLAN_BASE_URL",
    "ArachnioClient",
    "ArachnioError",
    "ArachnioSettings",
    "ArachnioTransportError",
    "ArticleWebpageEntityMetadata",
    "AsyncArachnioClient",
    "Authority",
    "BatchEntryError",
    "DefaultArachnioClient",
    "DomainName",
    "DomainNameBatch",
    "DomainNameBatchEntry",
    "DomainNameHost",
    "ExtractedLink",
    "ForbiddenError",
    "Hyperlink",
    "ImageMetadata",
    "InternalServerError",
    "InvalidArgumentError",
    "Ipv4Host",
    "Ipv6Host",
    "Link",
    "LinkBatch",
    "LinkBatchEntry",
    "ParsedDomainName",
    "ParsedDomainNameBatch",
    "ParsedDomainNameBatchEntry",
    "ParsedLink",
    "ParsedLinkBatch",
    "ParsedLinkBatchEntry",
    "QueryParameter",
    "RequestCanceledError",
    "ResponseDecodingError",
    "Scheme",
    "UnknownEntityMetadata",
    "UnknownHost",
    "UnrecognizedStatusError",
    "UnwindingOutcome",
    "UnwoundLink",
    "UnwoundLinkBatch",
    "UnwoundLinkBatchEntry",
    "WebpageEntityMetadata",
]
