from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

from capsule_crm import CapsuleCRM, Settings
from capsule_crm.services import CaseServices

from tests.fake_capsule import FakeCapsuleStore, create_app


@dataclass
class Call:
    method: str
    path: str
    body: Optional[dict] = None
    params: Optional[dict] = None


class RecordingConnection:
    """Connection double that records calls and replays canned responses"""

    defaults = {"GET": {}, "POST": {}, "PUT": True, "DELETE": True}

    def __init__(self) -> None:
        self.calls: list[Call] = []
        self.responses: dict[tuple[str, str], Any] = {}

    def respond(self, method: str, path: str, response: Any) -> None:
        self.responses[(method, path)] = response

    def get(self, path: str, params: Optional[dict] = None) -> Any:
        return self._record(Call("GET", path, params=params))

    def post(self, path: str, body: Optional[dict] = None) -> Any:
        return self._record(Call("POST", path, body=body))

    def put(self, path: str, body: Optional[dict] = None) -> Any:
        return self._record(Call("PUT", path, body=body))

    def delete(self, path: str) -> Any:
        return self._record(Call("DELETE", path))

    def _record(self, call: Call) -> Any:
        self.calls.append(call)
        response = self.responses.get((call.method, call.path), self.defaults[call.method])
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture()
def connection() -> RecordingConnection:
    return RecordingConnection()


@pytest.fixture()
def services(connection: RecordingConnection) -> CaseServices:
    return CaseServices.from_connection(connection)


@pytest.fixture()
def settings() -> Settings:
    return Settings(capsule_account="acme", capsule_api_token="secret-token")


@pytest.fixture()
def capsule_store() -> FakeCapsuleStore:
    return FakeCapsuleStore()


@pytest.fixture()
def crm(settings: Settings, capsule_store: FakeCapsuleStore):
    http_client = TestClient(create_app(capsule_store), base_url=settings.base_url)
    with CapsuleCRM(settings, http_client=http_client) as client:
        yield client
