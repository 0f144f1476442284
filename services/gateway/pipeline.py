"""
Request pipeline: fetch a whole GLPI collection, then format it
"""

from typing import Optional

import structlog

from services.normalize.tickets import format_tickets
from services.normalize.users import format_users
from shared.schemas.glpi import ItemType, SessionCredentials
from shared.schemas.ticket import FormattedTicket
from shared.schemas.user import FormattedUser

from .client import GLPIClient
from .errors import NotFoundError, require

logger = structlog.get_logger()


def session_credentials(session_token: Optional[str], app_token: Optional[str]) -> SessionCredentials:
    """Build credentials, raising ValidationError when either token is missing"""
    require(bool(session_token) and bool(app_token), "Session-Token e App-Token são necessários")
    return SessionCredentials(session_token=session_token, app_token=app_token)


async def collect_users(client: GLPIClient, credentials: SessionCredentials) -> list[FormattedUser]:
    """All listable GLPI users, sorted by first name"""
    raw_users = await client.fetch_all(ItemType.USER, credentials)
    if not raw_users:
        raise NotFoundError("Nenhum usuário encontrado")

    users = format_users(raw_users)
    if not users:
        raise NotFoundError("Nenhum usuário válido encontrado")

    logger.info("Collected users", fetched=len(raw_users), listed=len(users))
    return users


async def collect_tickets(
    client: GLPIClient,
    credentials: SessionCredentials,
    concurrency: int = 1,
) -> list[FormattedTicket]:
    """All GLPI tickets with resolved authors, newest first"""
    raw_tickets = await client.fetch_all(ItemType.TICKET, credentials)
    if not raw_tickets:
        raise NotFoundError("Nenhum ticket encontrado")

    tickets = await format_tickets(
        raw_tickets,
        client.author_resolver(credentials),
        concurrency=concurrency,
    )
    logger.info("Collected tickets", count=len(tickets))
    return tickets
