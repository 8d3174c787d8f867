from __future__ import annotations

from typing import Any

from promptable.core.config.schema import PromptableConfig, ProviderKind
from promptable.core.providers.base import GenerationRequest
from promptable.core.providers.openai_compatible import OpenAICompatibleAdapter
from promptable.core.runtime.errors import ConfigurationError


class AzureOpenAIAdapter(OpenAICompatibleAdapter):
    """Azure-hosted OpenAI; the deployment in the URL selects the model."""

    kind = ProviderKind.AZURE_OPENAI
    label = "Azure OpenAI"

    def __init__(self, config: PromptableConfig) -> None:
        super().__init__(config)
        azure = config.providers.azure_openai
        self.api_version = azure.api_version
        self.deployment_name = azure.deployment_name
        if not self.base_url:
            raise ConfigurationError(
                "Azure OpenAI requires providers.azure_openai.base_url to be set "
                "(e.g., https://your-resource.openai.azure.com)"
            )

    def endpoint(self, request: GenerationRequest) -> str:
        deployment = self.deployment_name or request.model
        return f"{self.base_url}/openai/deployments/{deployment}/chat/completions"

    def query_params(self) -> dict[str, str]:
        return {"api-version": self.api_version}

    def auth_headers(self) -> dict[str, str]:
        return {"api-key": self.api_key or ""}

    def build_body(self, request: GenerationRequest) -> dict[str, Any]:
        body = super().build_body(request)
        body.pop("model", None)
        return body
