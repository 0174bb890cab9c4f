"""Componentes de UI para la consola (Rich).

Tablas y paneles para presentar resultados; los comandos solo deciden qué
mostrar.
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from arachnio.core.domain.models import (
    ArticleWebpageEntityMetadata,
    Authority,
    BatchEntryError,
    DomainNameHost,
    ExtractedLink,
    Ipv4Host,
    Ipv6Host,
    ParsedDomainName,
    ParsedLink,
    UnwoundLink,
    WebpageEntityMetadata,
)


def describe_authority(authority: Authority) -> str:
    host = authority.host
    if isinstance(host, DomainNameHost):
        text = host.domain.hostname
    elif isinstance(host, Ipv4Host):
        text = host.ipv4
    elif isinstance(host, Ipv6Host):
        text = f"[{host.ipv6}]"
    else:
        text = f"<{host.type}>"
    if authority.port is not None:
        text = f"{text}:{authority.port}"
    return text


def _error_text(error: Optional[BatchEntryError]) -> str:
    if error is None:
        return ""
    return escape(error.message or error.code or "error")


def build_domains_table(
    rows: Iterable[Tuple[Optional[ParsedDomainName], Optional[BatchEntryError]]],
) -> Table:
    table = Table(title="Parsed Domain Names")
    table.add_column("Hostname", style="cyan", no_wrap=True)
    table.add_column("Public suffix", style="white")
    table.add_column("Registry suffix", style="green")
    table.add_column("Error", style="red")
    for domain, error in rows:
        if domain is None:
            table.add_row("", "", "", _error_text(error))
            continue
        table.add_row(
            escape(domain.hostname),
            escape(domain.public_suffix or ""),
            escape(domain.registry_suffix or ""),
            _error_text(error),
        )
    return table


def build_links_table(
    rows: Iterable[Tuple[Optional[ParsedLink], Optional[BatchEntryError]]],
) -> Table:
    table = Table(title="Parsed Links")
    table.add_column("Scheme", style="cyan", no_wrap=True)
    table.add_column("Authority", style="white")
    table.add_column("Path", style="magenta")
    table.add_column("Query", style="green")
    table.add_column("Error", style="red")
    for link, error in rows:
        if link is None:
            table.add_row("", "", "", "", _error_text(error))
            continue
        query = "&".join(
            p.name if p.value is None else f"{p.name}={p.value}" for p in link.query_parameters
        )
        table.add_row(
            link.scheme.value,
            escape(describe_authority(link.authority)),
            escape(link.path or ""),
            escape(query),
            _error_text(error),
        )
    return table


def build_unwound_table(
    rows: Iterable[Tuple[Optional[UnwoundLink], Optional[BatchEntryError]]],
) -> Table:
    table = Table(title="Unwound Links")
    table.add_column("Original", style="white")
    table.add_column("Unwound", style="magenta")
    table.add_column("Outcome", style="cyan", no_wrap=True)
    table.add_column("Canonical", style="green")
    table.add_column("Error", style="red")
    for unwound, error in rows:
        if unwound is None:
            table.add_row("", "", "", "", _error_text(error))
            continue
        table.add_row(
            escape(unwound.original.link),
            escape(unwound.unwound.link if unwound.unwound else ""),
            unwound.outcome.value,
            "yes" if unwound.canonical else "no",
            _error_text(error),
        )
    return table


def build_extracted_panel(extracted: ExtractedLink) -> Panel:
    """Panel con la metadata de la entidad extraída."""

    target = extracted.link.unwound or extracted.link.original
    body = Text()
    body.append(target.link + "\n", style="magenta")
    body.append(f"Outcome: {extracted.link.outcome.value}\n", style="dim")

    entity = extracted.entity
    if isinstance(entity, WebpageEntityMetadata):
        if entity.title:
            body.append("\n" + entity.title + "\n", style="bold")
        if entity.description:
            body.append(entity.description.strip() + "\n")
        if entity.thumbnail:
            body.append(f"\nThumbnail: {entity.thumbnail.url}", style="dim")
    if isinstance(entity, ArticleWebpageEntityMetadata):
        if entity.author:
            body.append(f"\nAuthor: {entity.author}")
        if entity.published_at:
            body.append(f"\nPublished: {entity.published_at.isoformat()}")
        if entity.body_links:
            body.append(f"\nBody links: {len(entity.body_links)}")
    if entity is None:
        body.append("\nNo entity metadata", style="yellow")

    kind = entity.entity_type if entity is not None else "none"
    if isinstance(entity, WebpageEntityMetadata):
        kind = f"{kind}/{entity.webpage_type}"
    return Panel(body, title=Text(kind, style="bold yellow"), border_style="yellow")
