from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from promptable.core.generation.runtime import PromptableRuntime, get_runtime
from promptable.core.providers.base import OutputFormat


class Promptable:
    """Mixin giving application records template-driven text generation.

    Subclasses set ``prompt_template`` directly or pick a registered one with
    ``use_template``. ``ai_generate_later`` needs an ``id`` attribute.
    """

    prompt_template: ClassVar[str | None] = None
    promptable_runtime: ClassVar[PromptableRuntime | None] = None

    @classmethod
    def runtime(cls) -> PromptableRuntime:
        return cls.promptable_runtime or get_runtime()

    @classmethod
    def use_template(cls, name: object) -> str:
        cls.prompt_template = cls.runtime().template(name)
        return cls.prompt_template

    def ai_generate(
        self,
        context: Mapping[Any, Any] | None = None,
        *,
        model: str | None = None,
        temperature: float | None = None,
        format: OutputFormat | str = OutputFormat.TEXT,
    ) -> str | None:
        return self.runtime().generate(
            type(self).prompt_template or "",
            context,
            model=model,
            temperature=temperature,
            format=format,
        )

    def ai_generate_later(self, context: Mapping[Any, Any] | None = None, **kwargs: Any) -> Any:
        return self.runtime().enqueue_generation(type(self).__name__, self.id, context, kwargs)
