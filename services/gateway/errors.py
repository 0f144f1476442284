"""
Error types surfaced by the GLPI bridge
"""

from typing import Any, Optional


class ValidationError(ValueError):
    """Caller did not supply the credentials an operation needs"""


class UpstreamError(Exception):
    """A GLPI request failed; carries the upstream error body when there was one"""

    def __init__(self, message: str, detail: Any = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail
        self.status_code = status_code

    @property
    def payload(self) -> Any:
        """Upstream error body if GLPI sent one, otherwise the message"""
        return self.detail if self.detail is not None else self.message


class NotFoundError(LookupError):
    """A fetch succeeded but produced nothing to return"""


def require(condition: bool, message: str) -> None:
    if not condition:
        raise ValidationError(message)
