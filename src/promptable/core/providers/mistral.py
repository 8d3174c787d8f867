from __future__ import annotations

from promptable.core.config.schema import ProviderKind
from promptable.core.providers.openai_compatible import OpenAICompatibleAdapter


class MistralAdapter(OpenAICompatibleAdapter):
    kind = ProviderKind.MISTRAL
    label = "Mistral"
    error_message_path = ("message",)
