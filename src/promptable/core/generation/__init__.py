"""Rendering, client caching and (deferred) generation for application records."""

from promptable.core.generation.jobs import (
    BackgroundGenerationJob,
    GenerationHooks,
    InMemoryJobQueue,
    JobQueue,
    QueuedJob,
)
from promptable.core.generation.promptable import Promptable
from promptable.core.generation.runtime import ClientCache, PromptableRuntime

__all__ = [
    "BackgroundGenerationJob",
    "ClientCache",
    "GenerationHooks",
    "InMemoryJobQueue",
    "JobQueue",
    "Promptable",
    "PromptableRuntime",
    "QueuedJob",
]
