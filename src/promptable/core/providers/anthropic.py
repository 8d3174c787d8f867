from __future__ import annotations

from typing import Any

from promptable.core.config.schema import ProviderKind
from promptable.core.providers.base import GenerationRequest, ProviderAdapter, user_messages

ANTHROPIC_API_VERSION = "2023-06-01"


class AnthropicAdapter(ProviderAdapter):
    kind = ProviderKind.ANTHROPIC
    label = "Anthropic"
    text_path = ("content", 0, "text")

    def endpoint(self, request: GenerationRequest) -> str:
        return f"{self.base_url}/messages"

    def auth_headers(self) -> dict[str, str]:
        return {"x-api-key": self.api_key or "", "anthropic-version": ANTHROPIC_API_VERSION}

    def build_body(self, request: GenerationRequest) -> dict[str, Any]:
        return {
            "model": request.model,
            "messages": user_messages(request.prompt),
            "temperature": request.temperature,
            "max_tokens": 4096,
        }
