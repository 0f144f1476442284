"""
GLPI Bridge - Ticket Schemas

Defines the client-facing FormattedTicket and the closed set of status labels
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel


class TicketStatus(str, Enum):
    """Display labels for GLPI ticket status codes"""
    NEW = "Novo"
    ASSIGNED = "Em atendimento (atribuído)"
    PLANNED = "Em atendimento (planejado)"
    WAITING = "Pendente"
    SOLVED = "Solucionado"
    CLOSED = "Fechado"
    UNKNOWN = "Desconhecido"


class FormattedTicket(BaseModel):
    """
    Client-facing ticket record.
    Title, group and creation date pass through exactly as GLPI sent them.
    """
    id: Optional[Any] = None
    titulo: Optional[Any] = None
    status: str = TicketStatus.UNKNOWN.value
    grupo_responsavel: Optional[Any] = None
    autor: str = TicketStatus.UNKNOWN.value
    data_criacao: Optional[Any] = None

    class Config:
        json_schema_extra = {
            "example": {
                "id": 42,
                "titulo": "Impressora sem toner",
                "status": "Novo",
                "grupo_responsavel": "Suporte N1",
                "autor": "Ana Silva",
                "data_criacao": "2024-01-01 09:30:00",
            }
        }
