from __future__ import annotations

from typing import Any

from promptable.core.config.schema import ProviderKind
from promptable.core.providers.base import GenerationRequest, ProviderAdapter


class GeminiAdapter(ProviderAdapter):
    kind = ProviderKind.GEMINI
    label = "Gemini"
    text_path = ("candidates", 0, "content", "parts", 0, "text")

    def endpoint(self, request: GenerationRequest) -> str:
        return f"{self.base_url}/models/{request.model}:generateContent"

    def query_params(self) -> dict[str, str]:
        # Gemini authenticates through the query string, not a header
        return {"key": self.api_key or ""}

    def auth_headers(self) -> dict[str, str]:
        return {}

    def build_body(self, request: GenerationRequest) -> dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": request.prompt}]}],
            "generationConfig": {
                "temperature": request.temperature,
                "maxOutputTokens": 2048,
            },
        }
