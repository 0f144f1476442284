import json

import httpx
import pytest
from fastapi.testclient import TestClient

from services.gateway.client import GLPIClient
from services.gateway.main import app
from shared.schemas.glpi import SessionCredentials

GLPI_URL = "https://glpi.test/apirest.php"


class FakeGLPI:
    """In-memory GLPI answering /search, /User/{id} and /initSession"""

    def __init__(self, collections=None, users=None, page_status=200):
        self.collections = collections or {}
        self.users = users or {}
        self.page_status = page_status
        self.requests: list[httpx.Request] = []
        self.fail_search_at = None
        self.fail_users = set()

    def search_calls(self, item_type):
        return [r for r in self.requests if r.url.path.endswith(f"/search/{item_type}")]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.replace("/apirest.php", "")

        if path == "/initSession":
            if request.headers.get("Authorization") == "user_token bad":
                return httpx.Response(401, json=["ERROR_GLPI_LOGIN_USER_TOKEN", "parameter user_token seems invalid"])
            return httpx.Response(200, json={"session_token": "sess-123"})

        if path.startswith("/search/"):
            item_type = path.split("/")[-1]
            start, end = (int(n) for n in request.url.params["range"].split("-"))
            if self.fail_search_at is not None and start >= self.fail_search_at:
                return httpx.Response(400, json=["ERROR_RANGE_EXCEED_TOTAL", "Provided range exceed total count of data"])
            rows = self.collections.get(item_type, [])
            body = {"totalcount": len(rows), "count": len(rows[start:end + 1])}
            if rows[start:end + 1]:
                body["data"] = rows[start:end + 1]
            return httpx.Response(self.page_status, json=body)

        if path.startswith("/User/"):
            user_id = path.split("/")[-1]
            if user_id in self.fail_users or user_id not in self.users:
                return httpx.Response(404, json=["ERROR_ITEM_NOT_FOUND", "Item not found"])
            return httpx.Response(200, json=self.users[user_id])

        return httpx.Response(404, content=json.dumps(["ERROR", "unknown"]))


@pytest.fixture()
def credentials():
    return SessionCredentials(session_token="sess-123", app_token="app-456")


@pytest.fixture()
def fake_glpi():
    return FakeGLPI()


@pytest.fixture()
def glpi_client(fake_glpi):
    return GLPIClient(GLPI_URL, user_token="ut-789", transport=httpx.MockTransport(fake_glpi.handler))


@pytest.fixture()
def client(glpi_client):
    with TestClient(app) as test_client:
        app.state.glpi_client = glpi_client
        yield test_client
