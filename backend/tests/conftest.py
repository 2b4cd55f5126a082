"""Shared fixtures: an app wired to a temp upload dir and a fake n8n webhook."""

from __future__ import annotations

import pytest
import requests
from fastapi.testclient import TestClient

from main import create_app
from marksheet_core.config import Settings

WEBHOOK_URL = "http://n8n.test/webhook-test/upload-marksheet"


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "{}") -> None:
        self.status_code = status_code
        self.text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400


class FakeWebhook:
    """Stands in for requests.post and records what the relay sent."""

    def __init__(self) -> None:
        self.calls: list[dict] = []
        self.response = FakeResponse()
        self.error: Exception | None = None

    def reply(self, status_code: int = 200, text: str = "{}") -> None:
        self.response = FakeResponse(status_code, text)

    def fail(self, error: Exception) -> None:
        self.error = error

    def __call__(self, url, files=None, json=None, **kwargs):
        call = {"url": url, "json": json}
        if files:
            filename, fh, content_type = files["data"]
            call.update(
                field=next(iter(files)),
                filename=filename,
                content_type=content_type,
                body=fh.read(),
                path=fh.name,
            )
        self.calls.append(call)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(n8n_test_url=WEBHOOK_URL, upload_dir=str(tmp_path / "uploads"))


@pytest.fixture
def webhook(monkeypatch: pytest.MonkeyPatch) -> FakeWebhook:
    fake = FakeWebhook()
    monkeypatch.setattr(requests, "post", fake)
    return fake


@pytest.fixture
def client(settings: Settings, webhook: FakeWebhook):
    with TestClient(create_app(settings)) as test_client:
        yield test_client
