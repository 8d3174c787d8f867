from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from promptable.core.config.loader import load_config
from promptable.core.config.schema import PromptableConfig
from promptable.core.generation.jobs import JobQueue
from promptable.core.providers.base import OutputFormat, ProviderAdapter
from promptable.core.providers.factory import for_provider
from promptable.core.runtime.errors import ConfigurationError, TemplateNotFoundError
from promptable.core.telemetry.logging import LogCapability
from promptable.core.templates.registry import TemplateRegistry, default_registry
from promptable.core.templates.renderer import render

DEFAULT_TEMPERATURE = 0.7

AdapterFactory = Callable[[object, PromptableConfig], ProviderAdapter]


class ClientCache:
    """Holds the adapter for the active provider until ``reset`` is called."""

    def __init__(self, factory: AdapterFactory = for_provider) -> None:
        self._factory = factory
        self._client: ProviderAdapter | None = None

    def get(self, config: PromptableConfig) -> ProviderAdapter:
        if self._client is None:
            self._client = self._factory(config.provider, config)
        return self._client

    def reset(self) -> None:
        self._client = None


class PromptableRuntime:
    def __init__(
        self,
        config: PromptableConfig | None = None,
        templates: TemplateRegistry | None = None,
        clients: ClientCache | None = None,
        job_queue: JobQueue | None = None,
    ) -> None:
        self.config = config or PromptableConfig()
        self.templates = templates if templates is not None else default_registry
        self.clients = clients or ClientCache()
        self.job_queue = job_queue

    @property
    def logger(self) -> LogCapability:
        return self.config.logger

    def client(self) -> ProviderAdapter:
        return self.clients.get(self.config)

    def reset_client(self) -> None:
        self.clients.reset()

    def template(self, name: object) -> str:
        template = self.templates.get(name)
        if template is None:
            raise TemplateNotFoundError(str(name), self.templates.list())
        return template

    def render(self, template: str | None, context: Mapping[Any, Any] | None = None) -> str:
        return render(template, context)

    def generate(
        self,
        template: str | None,
        context: Mapping[Any, Any] | None = None,
        *,
        model: str | None = None,
        temperature: float | None = None,
        format: OutputFormat | str = OutputFormat.TEXT,
    ) -> str | None:
        prompt = self.render(template, context)
        client = self.client()
        self.logger.info("prompt_rendered", provider=client.name, prompt_chars=len(prompt))
        return client.generate(
            prompt,
            model=model or self.config.default_model or self.config.model_for_provider(),
            temperature=DEFAULT_TEMPERATURE if temperature is None else temperature,
            format=format,
        )

    def enqueue_generation(
        self,
        type_name: str,
        record_id: Any,
        context: Mapping[Any, Any] | None,
        kwargs: Mapping[str, Any] | None,
    ) -> Any:
        if self.job_queue is None:
            raise ConfigurationError("deferred generation requires a job queue: pass job_queue= to configure()")
        self.logger.info("generation_enqueued", record_type=type_name, record_id=record_id)
        return self.job_queue.enqueue(type_name, record_id, dict(context or {}), dict(kwargs or {}))


_default_runtime: PromptableRuntime | None = None


def get_runtime() -> PromptableRuntime:
    global _default_runtime
    if _default_runtime is None:
        _default_runtime = PromptableRuntime(config=load_config())
    return _default_runtime


def configure(
    config: PromptableConfig | None = None,
    *,
    job_queue: JobQueue | None = None,
    **fields: Any,
) -> PromptableRuntime:
    """Adjust the process-wide runtime.

    Field changes do not reach an already-built client; call ``reset_client``.
    """
    global _default_runtime
    if config is not None:
        _default_runtime = PromptableRuntime(config=config, job_queue=job_queue)
    runtime = get_runtime()
    if job_queue is not None:
        runtime.job_queue = job_queue
    for key, value in fields.items():
        if key not in PromptableConfig.model_fields:
            raise ValueError(f"unknown configuration field: {key}")
        setattr(runtime.config, key, value)
    return runtime


def reset_runtime() -> None:
    global _default_runtime
    _default_runtime = None


def client() -> ProviderAdapter:
    return get_runtime().client()


def reset_client() -> None:
    get_runtime().reset_client()
