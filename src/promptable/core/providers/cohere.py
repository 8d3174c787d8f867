from __future__ import annotations

from typing import Any

from promptable.core.config.schema import ProviderKind
from promptable.core.providers.base import GenerationRequest, ProviderAdapter


class CohereAdapter(ProviderAdapter):
    kind = ProviderKind.COHERE
    label = "Cohere"
    text_path = ("generations", 0, "text")
    error_message_path = ("message",)

    def endpoint(self, request: GenerationRequest) -> str:
        return f"{self.base_url}/generate"

    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key or ''}"}

    def build_body(self, request: GenerationRequest) -> dict[str, Any]:
        return {
            "model": request.model,
            "prompt": request.prompt,
            "temperature": request.temperature,
            "max_tokens": 2048,
        }
