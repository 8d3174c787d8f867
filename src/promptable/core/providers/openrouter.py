from __future__ import annotations

from promptable.core.config.schema import PromptableConfig, ProviderKind
from promptable.core.providers.openai_compatible import OpenAICompatibleAdapter


class OpenRouterAdapter(OpenAICompatibleAdapter):
    kind = ProviderKind.OPENROUTER
    label = "OpenRouter"

    def __init__(self, config: PromptableConfig) -> None:
        super().__init__(config)
        self.app_name = config.providers.openrouter.app_name
        self.site_url = config.providers.openrouter.site_url

    def auth_headers(self) -> dict[str, str]:
        headers = super().auth_headers()
        # attribution headers, sent only when configured
        if self.site_url:
            headers["HTTP-Referer"] = self.site_url
        if self.app_name:
            headers["X-Title"] = self.app_name
        return headers
