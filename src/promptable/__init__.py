"""Template-driven text generation over interchangeable LLM providers."""

from promptable.core.config.schema import PromptableConfig, ProviderKind
from promptable.core.generation.jobs import BackgroundGenerationJob, GenerationHooks, InMemoryJobQueue
from promptable.core.generation.promptable import Promptable
from promptable.core.generation.runtime import (
    PromptableRuntime,
    client,
    configure,
    get_runtime,
    reset_client,
    reset_runtime,
)
from promptable.core.providers.base import OutputFormat
from promptable.core.providers.factory import available_providers, for_provider

__version__ = "0.3.0"

__all__ = [
    "BackgroundGenerationJob",
    "GenerationHooks",
    "InMemoryJobQueue",
    "OutputFormat",
    "Promptable",
    "PromptableConfig",
    "PromptableRuntime",
    "ProviderKind",
    "available_providers",
    "client",
    "configure",
    "for_provider",
    "get_runtime",
    "reset_client",
    "reset_runtime",
]
