"""
GLPI Bridge Gateway Service
Authenticates against GLPI and serves simplified users and tickets

Components:
- main.py: FastAPI application with /initSession, /users and /tickets
- client.py: GLPI REST client (paginated search, object lookup)
- pipeline.py: fetch-then-format steps shared by the API and the CLI
- errors.py: ValidationError, UpstreamError, NotFoundError
- config.py: environment configuration
- cli.py: Command-line interface
"""

from .client import GLPIClient
from .errors import NotFoundError, UpstreamError, ValidationError

__all__ = ["GLPIClient", "ValidationError", "UpstreamError", "NotFoundError"]
