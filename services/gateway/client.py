"""
GLPI REST Client
Talks to the GLPI REST API (apirest.php) over HTTP(S)
"""

from typing import Any, Optional

import httpx
import structlog

from services.normalize.fields import PAGE_SIZE, UNKNOWN
from services.normalize.tickets import AuthorResolver
from shared.schemas.glpi import ItemType, RawRecord, SearchPage, SessionCredentials

from .errors import UpstreamError

logger = structlog.get_logger()


def _error_body(response: httpx.Response) -> Any:
    """GLPI error bodies are JSON (usually ["ERROR_CODE", "message"])"""
    try:
        return response.json()
    except ValueError:
        return response.text or None


class GLPIClient:
    """
    Client for the GLPI REST API

    Every call carries the caller's App-Token and Session-Token; the client
    itself keeps no session state between requests.

    GLPI REST flow:
    1. POST /initSession with Authorization + App-Token to get a session_token
    2. POST /search/{itemtype}?range=a-b pages through a collection
    3. GET /{itemtype}/{id} reads one object
    """

    def __init__(
        self,
        base_url: str,
        user_token: str = "",
        verify_tls: bool = True,
        timeout: float = 30.0,
        max_pages: int = 10000,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_token = user_token
        self.verify_tls = verify_tls
        self.timeout = timeout
        self.max_pages = max_pages
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        if not verify_tls:
            logger.warning("TLS certificate verification disabled", glpi_url=self.base_url)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                verify=self.verify_tls,
                transport=self._transport,
            )
        return self._client

    async def _request(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        params: Optional[dict[str, str]] = None,
    ) -> Any:
        """Send one request, returning decoded JSON or raising UpstreamError"""
        url = f"{self.base_url}{path}"
        try:
            response = await self._get_client().request(method, url, headers=headers, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = _error_body(e.response)
            status = e.response.status_code
            logger.error("GLPI request failed", path=path, status=status, error=detail)
            raise UpstreamError(
                f"GLPI returned {status} for {method} {path}",
                detail=detail,
                status_code=status,
            ) from e
        except httpx.HTTPError as e:
            logger.error("GLPI unreachable", path=path, error=str(e))
            raise UpstreamError(str(e) or e.__class__.__name__) from e

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                f"GLPI sent a non-JSON body for {method} {path}",
                detail=response.text,
                status_code=response.status_code,
            ) from e

    def _session_headers(self, credentials: SessionCredentials) -> dict[str, str]:
        return {
            "App-Token": credentials.app_token,
            "Session-Token": credentials.session_token,
        }

    def _search_headers(self, credentials: SessionCredentials) -> dict[str, str]:
        headers = self._session_headers(credentials)
        if self.user_token:
            headers["Authorization"] = f"user_token {self.user_token}"
        return headers

    async def init_session(self, authorization: str, app_token: str) -> str:
        """Open a GLPI session and return its session token"""
        result = await self._request(
            "POST",
            "/initSession",
            headers={"Authorization": authorization, "App-Token": app_token},
        )
        token = result.get("session_token") if isinstance(result, dict) else None
        if not token:
            raise UpstreamError("GLPI did not return a session_token", detail=result)
        logger.info("Opened GLPI session")
        return token

    async def search_page(
        self,
        item_type: ItemType,
        credentials: SessionCredentials,
        range_start: int,
        range_end: int,
    ) -> SearchPage:
        """Fetch rows range_start..range_end (inclusive) of a collection"""
        result = await self._request(
            "POST",
            f"/search/{ItemType(item_type).value}",
            headers=self._search_headers(credentials),
            params={"range": f"{range_start}-{range_end}"},
        )
        if not isinstance(result, dict):
            return SearchPage()
        data = result.get("data")
        return SearchPage(
            data=data if isinstance(data, list) else None,
            totalcount=result.get("totalcount"),
        )

    async def fetch_all(
        self,
        item_type: ItemType,
        credentials: SessionCredentials,
    ) -> list[RawRecord]:
        """
        Page through a whole collection, PAGE_SIZE rows per request

        Args:
            item_type: GLPI itemtype to search
            credentials: Caller's App-Token and Session-Token

        Returns:
            Every raw row, in upstream order

        Raises:
            UpstreamError: any page failed, or the upstream never reported
                a reachable totalcount within max_pages requests
        """
        item_type = ItemType(item_type)
        records: list[RawRecord] = []
        range_start, range_end = 0, PAGE_SIZE - 1

        for page in range(1, self.max_pages + 1):
            result = await self.search_page(item_type, credentials, range_start, range_end)
            records.extend(result.records())
            total = result.total()
            logger.debug(
                "Fetched page",
                item_type=item_type.value,
                page=page,
                range=f"{range_start}-{range_end}",
                total=total,
            )

            if range_end >= total - 1:
                logger.info(
                    "Fetched collection",
                    item_type=item_type.value,
                    count=len(records),
                    pages=page,
                )
                return records

            range_start = range_end + 1
            range_end = range_start + PAGE_SIZE - 1

        logger.error("Pagination did not terminate", item_type=item_type.value, max_pages=self.max_pages)
        raise UpstreamError(
            f"Pagination of {item_type.value} exceeded {self.max_pages} pages",
            detail={"fetched": len(records)},
        )

    async def get_item(
        self,
        item_type: ItemType,
        item_id: Any,
        credentials: SessionCredentials,
    ) -> dict:
        """Read a single GLPI object"""
        result = await self._request(
            "GET",
            f"/{ItemType(item_type).value}/{item_id}",
            headers=self._session_headers(credentials),
        )
        if not isinstance(result, dict):
            raise UpstreamError(f"Unexpected {item_type} payload", detail=result)
        return result

    async def get_user_name(self, user_id: Any, credentials: SessionCredentials) -> str:
        """Display name ("firstname realname") of a GLPI user"""
        user = await self.get_item(ItemType.USER, user_id, credentials)
        name = " ".join(str(part) for part in (user.get("firstname"), user.get("realname")) if part)
        return name or UNKNOWN

    def author_resolver(self, credentials: SessionCredentials) -> AuthorResolver:
        """Bind credentials into a resolve_author callable for format_tickets"""

        async def resolve(user_id: Any) -> str:
            return await self.get_user_name(user_id, credentials)

        return resolve

    async def check_health(self) -> bool:
        """Check if the GLPI API answers at all"""
        try:
            response = await self._get_client().get(f"{self.base_url}/")
            return response.status_code < 500
        except httpx.HTTPError as e:
            logger.warning("GLPI health check failed", error=str(e))
            return False

    async def close(self):
        """Close the underlying HTTP client"""
        if self._client:
            await self._client.aclose()
            self._client = None
