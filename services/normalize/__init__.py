"""
GLPI Bridge Normalize Service
Converts raw GLPI search rows to client-facing records

Components:
- fields.py: GLPI field-ID map, page size and status labels
- users.py: format_users for raw -> FormattedUser conversion
- tickets.py: format_tickets for raw -> FormattedTicket conversion with author lookup
"""

from .tickets import decode_status, format_tickets, parse_created_at
from .users import format_users

__all__ = ["format_users", "format_tickets", "decode_status", "parse_created_at"]
