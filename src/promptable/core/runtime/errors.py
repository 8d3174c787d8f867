from __future__ import annotations

import re


class PromptableError(Exception):
    """Base exception for all promptable errors."""


class ConfigurationError(PromptableError):
    """A required setting cannot be resolved."""


class UnknownProviderError(PromptableError, ValueError):
    def __init__(self, identifier: object, supported: list[str]) -> None:
        self.identifier = identifier
        self.supported = list(supported)
        super().__init__(f"Unknown provider: {identifier}. Supported providers: {', '.join(self.supported)}")


class TemplateNotFoundError(PromptableError, LookupError):
    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = list(available)
        super().__init__(f"Template '{name}' not found. Available templates: {', '.join(self.available)}")


class ProviderAPIError(PromptableError):
    """A vendor answered with an error status."""

    def __init__(self, provider: str, status_code: int, message: str) -> None:
        self.provider = provider
        self.status_code = status_code
        self.message = message
        super().__init__(f"{provider} API error ({status_code}): {message}")


def _compact_message(message: str, max_len: int = 220) -> str:
    msg = message.lower()
    msg = re.sub(r"\s+", " ", msg)
    return msg.strip()[:max_len]


def compact_error_summary(exc: Exception, max_len: int = 220) -> str:
    return f"{exc.__class__.__name__}: {_compact_message(str(exc), max_len=max_len)}"
