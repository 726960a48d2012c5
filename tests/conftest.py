from __future__ import annotations

import json
from urllib.parse import parse_qsl

import httpx
import pytest

from hipchat_output.config import HipchatOutputConfig, load_config
from hipchat_output.output import HipchatOutput
from hipchat_output.runner import QueueRunner

SENT = json.dumps({"status": "sent"}).encode()


class FakeHipchatApi:
    """Records every request and answers with a configurable response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        # Consumed one per request before falling back to status_code
        self.status_codes: list[int] = []
        self.body: bytes = SENT
        self.error: type[httpx.HTTPError] | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self.error is not None:
            raise self.error("boom", request=request)
        status_code = self.status_codes.pop(0) if self.status_codes else self.status_code
        return httpx.Response(status_code, content=self.body)

    @property
    def forms(self) -> list[dict[str, str]]:
        return [dict(parse_qsl(r.content.decode())) for r in self.requests]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for key in ("HIPCHAT_AUTH_TOKEN", "HIPCHAT_ROOM_ID", "HIPCHAT_FROM", "HIPCHAT_NOTIFY", "HIPCHAT_PAYLOAD_ONLY"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def raw_config() -> dict[str, object]:
    return {"auth_token": "s3cret/token+1", "room_id": "42", "from": "Bot", "payload_only": True, "notify": False}


@pytest.fixture()
def config(raw_config) -> HipchatOutputConfig:
    return load_config(raw_config)


@pytest.fixture()
def api() -> FakeHipchatApi:
    return FakeHipchatApi()


@pytest.fixture()
def client(api: FakeHipchatApi):
    with httpx.Client(transport=httpx.MockTransport(api.handler)) as client:
        yield client


@pytest.fixture()
def output(config, client) -> HipchatOutput:
    return HipchatOutput(config, client=client)


@pytest.fixture()
def runner() -> QueueRunner:
    return QueueRunner()
