from __future__ import annotations

from promptable.core.config.schema import ProviderKind
from promptable.core.providers.openai_compatible import OpenAICompatibleAdapter


class OpenAIAdapter(OpenAICompatibleAdapter):
    kind = ProviderKind.OPENAI
    label = "OpenAI"
    max_tokens = None
