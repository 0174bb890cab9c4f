"""Contrato del cliente Arachnio.

Cada operación acepta la forma cómoda (un `str` o una lista) o la petición
estructurada; ambas viajan igual por el cable.
"""

from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

from arachnio.core.domain.models import (
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


@runtime_checkable
class ArachnioClient(Protocol):
    """Operaciones síncronas expuestas por la API.

    Reglas de diseño:
    - Sin validación local más allá de construir la petición; el servicio es
      la autoridad sobre qué es un dominio o un link válido.
    - Los batches devuelven entradas en el mismo orden que la petición.
    """

    def parse_domain_name(self, domain_name: str | DomainName) -> ParsedDomainName:
        ...

    def parse_domain_name_batch(
        self,
        batch: DomainNameBatch | Iterable[DomainNameBatchEntry | str],
    ) -> ParsedDomainNameBatch:
        ...

    def extract_link(self, link: str | Link) -> ExtractedLink:
        ...

    def parse_link(self, link: str | Link) -> ParsedLink:
        ...

    def parse_link_batch(
        self,
        batch: LinkBatch | Iterable[LinkBatchEntry | str],
    ) -> ParsedLinkBatch:
        ...

    def unwind_link(self, link: str | Link) -> UnwoundLink:
        ...

    def unwind_link_batch(
        self,
        batch: LinkBatch | Iterable[LinkBatchEntry | str],
    ) -> UnwoundLinkBatch:
        ...
