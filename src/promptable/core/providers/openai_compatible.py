from __future__ import annotations

from typing import Any

from promptable.core.providers.base import GenerationRequest, ProviderAdapter, user_messages


class OpenAICompatibleAdapter(ProviderAdapter):
    """Shared shape of ``/chat/completions`` APIs with bearer auth."""

    text_path = ("choices", 0, "message", "content")
    max_tokens: int | None = 2048

    def endpoint(self, request: GenerationRequest) -> str:
        return f"{self.base_url}/chat/completions"

    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key or ''}"}

    def build_body(self, request: GenerationRequest) -> dict[str, Any]:
        body: dict[str, Any] = {
            "model": request.model,
            "messages": user_messages(request.prompt),
            "temperature": request.temperature,
        }
        if self.max_tokens is not None:
            body["max_tokens"] = self.max_tokens
        return body
