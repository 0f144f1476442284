"""
GLPI Bridge - Upstream Schemas

Credentials and envelope shapes exchanged with the GLPI REST API
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel

# Field-ID keyed record as returned by /search/{itemtype}
RawRecord = dict[str, Any]


class ItemType(str, Enum):
    """GLPI itemtypes this bridge pages through"""
    USER = "User"
    TICKET = "Ticket"


class SessionCredentials(BaseModel):
    """Per-request GLPI tokens supplied by the caller (never stored)"""
    session_token: str
    app_token: str


class SearchPage(BaseModel):
    """One page of a /search response"""
    data: Optional[list] = None
    totalcount: Any = 0

    def records(self) -> list[RawRecord]:
        return list(self.data or [])

    def total(self) -> int:
        try:
            return int(self.totalcount or 0)
        except (TypeError, ValueError):
            return 0
