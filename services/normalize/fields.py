"""
GLPI search-option field IDs

The numeric keys GLPI uses in /search results, fixed by the remote schema.
"""

from shared.schemas.ticket import TicketStatus

# Rows requested per /search call
PAGE_SIZE = 20

# User search options -> FormattedUser attribute
USER_FIELDS = {
    "1": "id",
    "9": "nome",
    "34": "sobrenome",
    "81": "titulo",
    "5": "email",
    "11": "telefone",
    "13": "setor",
    "8": "status",
}

# Attributes a user must carry to be listed
REQUIRED_USER_FIELDS = ("nome", "sobrenome", "email")

# Ticket search options
TICKET_TITLE = "1"
TICKET_AUTHOR = "4"
TICKET_GROUP = "8"
TICKET_STATUS = "12"
TICKET_CREATED = "19"

STATUS_LABELS = {
    1: TicketStatus.NEW,
    2: TicketStatus.ASSIGNED,
    3: TicketStatus.PLANNED,
    4: TicketStatus.WAITING,
    5: TicketStatus.SOLVED,
    6: TicketStatus.CLOSED,
}

# Label used when a status or author cannot be resolved
UNKNOWN = TicketStatus.UNKNOWN.value
