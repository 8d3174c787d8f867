from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from promptable.core.config.schema import PromptableConfig
from promptable.core.telemetry.logging import configure_logging

# env var -> dotted path inside the config mapping
ENV_OVERRIDES: dict[str, str] = {
    "PROMPTABLE_PROVIDER": "provider",
    "PROMPTABLE_API_KEY": "api_key",
    "PROMPTABLE_DEFAULT_MODEL": "default_model",
    "PROMPTABLE_TIMEOUT_SECONDS": "timeout_seconds",
    "PROMPTABLE_LOG_LEVEL": "telemetry.log_level",
    "OPENAI_API_KEY": "providers.openai.api_key",
    "ANTHROPIC_API_KEY": "providers.anthropic.api_key",
    "GEMINI_API_KEY": "providers.gemini.api_key",
    "COHERE_API_KEY": "providers.cohere.api_key",
    "AZURE_OPENAI_API_KEY": "providers.azure_openai.api_key",
    "AZURE_OPENAI_BASE_URL": "providers.azure_openai.base_url",
    "AZURE_OPENAI_DEPLOYMENT_NAME": "providers.azure_openai.deployment_name",
    "MISTRAL_API_KEY": "providers.mistral.api_key",
    "OPENROUTER_API_KEY": "providers.openrouter.api_key",
    "OPENROUTER_APP_NAME": "providers.openrouter.app_name",
    "OPENROUTER_SITE_URL": "providers.openrouter.site_url",
}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    content = yaml.safe_load(path.read_text(encoding="utf-8"))
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return content


def _set_dotted(target: dict[str, Any], dotted: str, value: str) -> None:
    *parents, leaf = dotted.split(".")
    node = target
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[leaf] = value


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for env_name, dotted in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value:
            _set_dotted(out, dotted, value)
    return out


def load_config(
    defaults_path: str | Path | None = None,
    instance_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> PromptableConfig:
    env = os.environ if environ is None else environ
    defaults = _load_yaml(Path(defaults_path)) if defaults_path else {}

    explicit_instance = instance_path or env.get("PROMPTABLE_CONFIG_FILE")
    instance = _load_yaml(Path(explicit_instance)) if explicit_instance else {}

    merged = _deep_merge(defaults, instance)
    merged = _deep_merge(merged, _env_overrides(env))

    try:
        cfg = PromptableConfig.model_validate(merged)
    except ValidationError as exc:
        raise ValueError(f"Invalid promptable configuration: {exc}") from exc

    # structlog is only reconfigured when telemetry settings are given
    if "telemetry" in merged:
        configure_logging(cfg.telemetry.log_level, json_logs=cfg.telemetry.json_logs)
    return cfg
