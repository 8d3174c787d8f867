from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from promptable.core.runtime.errors import UnknownProviderError
from promptable.core.telemetry.logging import get_logger


class ProviderKind(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"
    COHERE = "cohere"
    AZURE_OPENAI = "azure_openai"
    MISTRAL = "mistral"
    OPENROUTER = "openrouter"


PROVIDER_SYNONYMS: dict[str, ProviderKind] = {
    "openai": ProviderKind.OPENAI,
    "anthropic": ProviderKind.ANTHROPIC,
    "claude": ProviderKind.ANTHROPIC,
    "gemini": ProviderKind.GEMINI,
    "google": ProviderKind.GEMINI,
    "cohere": ProviderKind.COHERE,
    "azure_openai": ProviderKind.AZURE_OPENAI,
    "azure": ProviderKind.AZURE_OPENAI,
    "mistral": ProviderKind.MISTRAL,
    "openrouter": ProviderKind.OPENROUTER,
}

DEFAULT_BASE_URLS: dict[ProviderKind, str | None] = {
    ProviderKind.OPENAI: "https://api.openai.com/v1",
    ProviderKind.ANTHROPIC: "https://api.anthropic.com/v1",
    ProviderKind.GEMINI: "https://generativelanguage.googleapis.com/v1beta",
    ProviderKind.COHERE: "https://api.cohere.ai/v1",
    ProviderKind.AZURE_OPENAI: None,
    ProviderKind.MISTRAL: "https://api.mistral.ai/v1",
    ProviderKind.OPENROUTER: "https://openrouter.ai/api/v1",
}

DEFAULT_MODELS: dict[ProviderKind, str] = {
    ProviderKind.OPENAI: "gpt-4o-mini",
    ProviderKind.ANTHROPIC: "claude-3-5-sonnet-20241022",
    ProviderKind.GEMINI: "gemini-pro",
    ProviderKind.COHERE: "command",
    ProviderKind.AZURE_OPENAI: "gpt-4",
    ProviderKind.MISTRAL: "mistral-small-latest",
    ProviderKind.OPENROUTER: "openai/gpt-3.5-turbo",
}


def normalize_provider_identifier(identifier: object) -> str:
    raw = identifier.value if isinstance(identifier, Enum) else identifier
    return str(raw or "").strip().lower().lstrip(":")


def resolve_provider_kind(identifier: object) -> ProviderKind | None:
    return PROVIDER_SYNONYMS.get(normalize_provider_identifier(identifier))


class ProviderConfig(BaseModel):
    api_key: str | None = None
    base_url: str | None = None
    timeout_seconds: int | None = None


class AzureOpenAIConfig(ProviderConfig):
    api_version: str = "2024-02-15-preview"
    deployment_name: str | None = None


class OpenRouterConfig(ProviderConfig):
    app_name: str | None = None
    site_url: str | None = None


class ProvidersConfig(BaseModel):
    openai: ProviderConfig = Field(default_factory=ProviderConfig)
    anthropic: ProviderConfig = Field(default_factory=ProviderConfig)
    gemini: ProviderConfig = Field(default_factory=ProviderConfig)
    cohere: ProviderConfig = Field(default_factory=ProviderConfig)
    azure_openai: AzureOpenAIConfig = Field(default_factory=AzureOpenAIConfig)
    mistral: ProviderConfig = Field(default_factory=ProviderConfig)
    openrouter: OpenRouterConfig = Field(default_factory=OpenRouterConfig)


class TelemetryConfig(BaseModel):
    log_level: str = "INFO"
    json_logs: bool = True


class PromptableConfig(BaseModel):
    """Global and per-provider settings.

    Mutate fields by plain attribute assignment before the first client is
    built; adapters copy what they need at construction time.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    provider: str = ProviderKind.OPENAI.value
    api_key: str | None = None
    default_model: str | None = None
    timeout_seconds: int = 30
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)
    providers: ProvidersConfig = Field(default_factory=ProvidersConfig)
    logger: Any = Field(default_factory=lambda: get_logger("promptable"), exclude=True)

    def provider_settings(self, provider: object) -> ProviderConfig:
        kind = resolve_provider_kind(provider)
        if kind is None:
            raise UnknownProviderError(provider, [k.value for k in ProviderKind])
        return getattr(self.providers, kind.value)

    def effective_api_key(self, provider: object) -> str | None:
        return self.provider_settings(provider).api_key or self.api_key

    def effective_base_url(self, provider: object) -> str | None:
        kind = resolve_provider_kind(provider)
        configured = self.provider_settings(provider).base_url
        return configured or DEFAULT_BASE_URLS[kind]

    def effective_timeout(self, provider: object) -> int:
        timeout = self.provider_settings(provider).timeout_seconds
        return timeout if timeout is not None else self.timeout_seconds

    def model_for_provider(self) -> str | None:
        kind = resolve_provider_kind(self.provider)
        if kind is None:
            return self.default_model
        if kind is ProviderKind.AZURE_OPENAI:
            return self.providers.azure_openai.deployment_name or DEFAULT_MODELS[kind]
        return DEFAULT_MODELS[kind]
