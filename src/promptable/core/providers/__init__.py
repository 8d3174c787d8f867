"""Vendor adapters behind the uniform generate() contract."""

from promptable.core.providers.anthropic import AnthropicAdapter
from promptable.core.providers.azure_openai import AzureOpenAIAdapter
from promptable.core.providers.base import GenerationRequest, OutputFormat, ProviderAdapter
from promptable.core.providers.cohere import CohereAdapter
from promptable.core.providers.factory import available_providers, for_provider
from promptable.core.providers.gemini import GeminiAdapter
from promptable.core.providers.mistral import MistralAdapter
from promptable.core.providers.openai import OpenAIAdapter
from promptable.core.providers.openrouter import OpenRouterAdapter

__all__ = [
    "AnthropicAdapter",
    "AzureOpenAIAdapter",
    "CohereAdapter",
    "GeminiAdapter",
    "GenerationRequest",
    "MistralAdapter",
    "OpenAIAdapter",
    "OpenRouterAdapter",
    "OutputFormat",
    "ProviderAdapter",
    "available_providers",
    "for_provider",
]
