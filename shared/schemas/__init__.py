"""GLPI Bridge Shared Schemas"""

from .glpi import ItemType, RawRecord, SearchPage, SessionCredentials
from .ticket import FormattedTicket, TicketStatus
from .user import FormattedUser

__all__ = [
    # Upstream schemas
    "ItemType",
    "RawRecord",
    "SearchPage",
    "SessionCredentials",
    # Formatted output
    "FormattedUser",
    "FormattedTicket",
    "TicketStatus",
]
