"""Shared test fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from promptable.core.config.schema import PromptableConfig
from promptable.core.generation import runtime as runtime_module


class RecordingLogger:
    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict[str, Any]]] = []

    def info(self, event: str, **kwargs: Any) -> None:
        self.records.append(("info", event, kwargs))

    def warning(self, event: str, **kwargs: Any) -> None:
        self.records.append(("warning", event, kwargs))

    def error(self, event: str, **kwargs: Any) -> None:
        self.records.append(("error", event, kwargs))

    def at(self, level: str) -> list[tuple[str, str, dict[str, Any]]]:
        return [r for r in self.records if r[0] == level]


class FakeResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, invalid_json: bool = False) -> None:
        self._payload = payload
        self.status_code = status_code
        self._invalid_json = invalid_json

    def json(self) -> Any:
        if self._invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


@dataclass
class PostedRequest:
    url: str
    params: dict[str, str] | None
    headers: dict[str, str]
    json: dict[str, Any]
    timeout: Any


@dataclass
class FakeHTTP:
    response: FakeResponse = field(default_factory=lambda: FakeResponse({}))
    error: Exception | None = None
    calls: list[PostedRequest] = field(default_factory=list)

    def respond(self, payload: Any = None, status_code: int = 200, invalid_json: bool = False) -> None:
        self.response = FakeResponse(payload, status_code=status_code, invalid_json=invalid_json)

    @property
    def last(self) -> PostedRequest:
        return self.calls[-1]


class _FakeClient:
    def __init__(self, http: FakeHTTP, timeout: Any = None, **kwargs: Any) -> None:
        _ = kwargs
        self._http = http
        self._timeout = timeout

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        _ = (exc_type, exc, tb)
        return False

    def post(self, url: str, params=None, headers=None, json=None):
        self._http.calls.append(
            PostedRequest(url=url, params=params, headers=dict(headers or {}), json=json, timeout=self._timeout)
        )
        if self._http.error is not None:
            raise self._http.error
        return self._http.response


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def config(logger) -> PromptableConfig:
    return PromptableConfig(api_key="generic-key", logger=logger)


@pytest.fixture
def http(monkeypatch) -> FakeHTTP:
    fake = FakeHTTP()
    monkeypatch.setattr(
        "promptable.core.providers.base.httpx.Client",
        lambda *args, **kwargs: _FakeClient(fake, *args, **kwargs),
    )
    return fake


@pytest.fixture(autouse=True)
def _isolated_default_runtime():
    runtime_module.reset_runtime()
    yield
    runtime_module.reset_runtime()
