from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx

from promptable.core.config.schema import PromptableConfig, ProviderKind
from promptable.core.runtime.errors import ProviderAPIError, compact_error_summary


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


@dataclass(slots=True)
class GenerationRequest:
    prompt: str
    model: str | None
    temperature: float = 0.7
    format: OutputFormat | str = OutputFormat.TEXT


def dig(payload: Any, *path: str | int) -> Any:
    node = payload
    for key in path:
        if isinstance(key, int):
            if not isinstance(node, list) or not -len(node) <= key < len(node):
                return None
            node = node[key]
        else:
            if not isinstance(node, dict):
                return None
            node = node.get(key)
        if node is None:
            return None
    return node


class ProviderAdapter(ABC):
    """One vendor's text-generation endpoint behind a uniform ``generate``.

    Credentials, base URL, timeout and logger are copied from the
    configuration when the adapter is built.
    """

    kind: ProviderKind
    label: str
    text_path: tuple[str | int, ...]
    error_message_path: tuple[str | int, ...] = ("error", "message")

    def __init__(self, config: PromptableConfig) -> None:
        self.api_key = config.effective_api_key(self.kind)
        base_url = config.effective_base_url(self.kind)
        self.base_url = base_url.rstrip("/") if base_url else None
        self.timeout_seconds = config.effective_timeout(self.kind)
        self.logger = config.logger

    @property
    def name(self) -> str:
        return self.kind.value

    @abstractmethod
    def endpoint(self, request: GenerationRequest) -> str:
        raise NotImplementedError

    @abstractmethod
    def auth_headers(self) -> dict[str, str]:
        raise NotImplementedError

    @abstractmethod
    def build_body(self, request: GenerationRequest) -> dict[str, Any]:
        raise NotImplementedError

    def query_params(self) -> dict[str, str] | None:
        return None

    def headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json", **self.auth_headers()}

    def extract_text(self, payload: Any) -> str | None:
        return dig(payload, *self.text_path)

    def generate(
        self,
        prompt: str,
        *,
        model: str | None,
        temperature: float = 0.7,
        format: OutputFormat | str = OutputFormat.TEXT,
    ) -> str | None:
        # format is carried on the request but no vendor body uses it yet
        request = GenerationRequest(prompt=prompt, model=model, temperature=temperature, format=format)
        try:
            payload = self._post(
                self.endpoint(request),
                headers=self.headers(),
                body=self.build_body(request),
                params=self.query_params(),
            )
        except Exception as exc:  # noqa: BLE001
            self.logger.error(
                "provider_generate_failed",
                provider=self.name,
                model=model,
                error=compact_error_summary(exc),
            )
            return None
        return self.extract_text(payload)

    def _post(
        self,
        url: str,
        *,
        headers: dict[str, str],
        body: dict[str, Any],
        params: dict[str, str] | None = None,
    ) -> Any:
        with httpx.Client(timeout=self.timeout_seconds) as client:
            resp = client.post(url, params=params, headers=headers, json=body)
            if resp.status_code >= 400:
                raise ProviderAPIError(self.label, resp.status_code, self._error_message(resp))
            return resp.json()

    def _error_message(self, resp: httpx.Response) -> str:
        try:
            parsed = resp.json()
        except ValueError:
            return "Unknown error"
        message = dig(parsed, *self.error_message_path)
        return str(message) if message else "Unknown error"


def user_messages(prompt: str) -> list[dict[str, str]]:
    return [{"role": "user", "content": prompt}]
