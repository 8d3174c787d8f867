from __future__ import annotations

from promptable.core.config.schema import PromptableConfig, ProviderKind, resolve_provider_kind
from promptable.core.providers.anthropic import AnthropicAdapter
from promptable.core.providers.azure_openai import AzureOpenAIAdapter
from promptable.core.providers.base import ProviderAdapter
from promptable.core.providers.cohere import CohereAdapter
from promptable.core.providers.gemini import GeminiAdapter
from promptable.core.providers.mistral import MistralAdapter
from promptable.core.providers.openai import OpenAIAdapter
from promptable.core.providers.openrouter import OpenRouterAdapter
from promptable.core.runtime.errors import UnknownProviderError

ADAPTERS: dict[ProviderKind, type[ProviderAdapter]] = {
    ProviderKind.OPENAI: OpenAIAdapter,
    ProviderKind.ANTHROPIC: AnthropicAdapter,
    ProviderKind.GEMINI: GeminiAdapter,
    ProviderKind.COHERE: CohereAdapter,
    ProviderKind.AZURE_OPENAI: AzureOpenAIAdapter,
    ProviderKind.MISTRAL: MistralAdapter,
    ProviderKind.OPENROUTER: OpenRouterAdapter,
}


def available_providers() -> list[str]:
    return [kind.value for kind in ProviderKind]


def for_provider(identifier: object, config: PromptableConfig) -> ProviderAdapter:
    kind = resolve_provider_kind(identifier)
    if kind is None:
        raise UnknownProviderError(identifier, available_providers())
    return ADAPTERS[kind](config)
