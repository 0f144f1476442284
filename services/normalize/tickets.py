"""
Ticket Formatter
Converts raw GLPI ticket search rows to FormattedTicket records,
resolving each ticket's author through an injected lookup
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Iterable, Optional

import structlog

from shared.schemas.glpi import RawRecord
from shared.schemas.ticket import FormattedTicket

from .fields import (
    STATUS_LABELS,
    TICKET_AUTHOR,
    TICKET_CREATED,
    TICKET_GROUP,
    TICKET_STATUS,
    TICKET_TITLE,
    UNKNOWN,
)

logger = structlog.get_logger()

AuthorResolver = Callable[[Any], Awaitable[str]]

# Sort key for creation dates that cannot be parsed
EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def decode_status(code: Any) -> str:
    """Map a GLPI status code (1-6) to its label, anything else to Desconhecido"""
    # bool is an int subclass; True must not read as status 1
    if isinstance(code, bool) or not isinstance(code, int):
        return UNKNOWN
    label = STATUS_LABELS.get(code)
    return label.value if label else UNKNOWN


def parse_created_at(value: Any) -> Optional[datetime]:
    """Parse GLPI date strings ("2024-01-01 09:30:00", ISO 8601) as UTC"""
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _created_sort_key(ticket: FormattedTicket) -> datetime:
    return parse_created_at(ticket.data_criacao) or EARLIEST


async def _resolve(resolve_author: AuthorResolver, raw: RawRecord) -> str:
    author_id = raw.get(TICKET_AUTHOR)
    try:
        name = await resolve_author(author_id)
        return str(name) if name else UNKNOWN
    except Exception as e:
        logger.warning(
            "Failed to resolve ticket author",
            ticket_id=raw.get("id"),
            author_id=author_id,
            error=str(e),
        )
        return UNKNOWN


def build_ticket(raw: RawRecord, author: str) -> FormattedTicket:
    """Project a raw ticket row once its author name is known"""
    return FormattedTicket(
        id=raw.get("id"),
        titulo=raw.get(TICKET_TITLE),
        status=decode_status(raw.get(TICKET_STATUS)),
        grupo_responsavel=raw.get(TICKET_GROUP),
        autor=author,
        data_criacao=raw.get(TICKET_CREATED),
    )


async def format_tickets(
    raw_records: Iterable[RawRecord],
    resolve_author: AuthorResolver,
    concurrency: int = 1,
) -> list[FormattedTicket]:
    """
    Enrich, decode and order raw ticket rows.

    Args:
        raw_records: Rows from /search/Ticket
        resolve_author: Async lookup from author ID to display name
        concurrency: Max author lookups in flight (1 = one at a time)

    Returns:
        Tickets sorted by creation date, newest first. Tickets whose date
        cannot be parsed come last.
    """
    tickets = [raw for raw in raw_records or [] if isinstance(raw, dict)]

    if concurrency <= 1:
        authors = []
        for raw in tickets:
            authors.append(await _resolve(resolve_author, raw))
    else:
        semaphore = asyncio.Semaphore(concurrency)

        async def bounded(raw: RawRecord) -> str:
            async with semaphore:
                return await _resolve(resolve_author, raw)

        # gather returns results in argument order
        authors = await asyncio.gather(*(bounded(raw) for raw in tickets))

    formatted = [build_ticket(raw, author) for raw, author in zip(tickets, authors)]
    logger.debug("Formatted tickets", count=len(formatted), concurrency=concurrency)

    return sorted(formatted, key=_created_sort_key, reverse=True)
