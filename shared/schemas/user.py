"""
GLPI Bridge - User Schemas
"""

from pydantic import BaseModel


class FormattedUser(BaseModel):
    """Client-facing user record; every attribute is a string, empty when absent"""
    id: str = ""
    nome: str = ""
    sobrenome: str = ""
    titulo: str = ""
    email: str = ""
    telefone: str = ""
    setor: str = ""
    status: str = ""

    class Config:
        json_schema_extra = {
            "example": {
                "id": "ana.silva",
                "nome": "Ana",
                "sobrenome": "Silva",
                "titulo": "Analista",
                "email": "ana@example.com",
                "telefone": "",
                "setor": "TI",
                "status": "1",
            }
        }
