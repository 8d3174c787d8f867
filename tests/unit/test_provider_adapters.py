from __future__ import annotations

import httpx
import pytest

from promptable.core.config.schema import ProviderKind
from promptable.core.providers.base import OutputFormat
from promptable.core.providers.factory import for_provider
from promptable.core.runtime.errors import ConfigurationError

AZURE_BASE = "https://example.openai.azure.com"

CHAT_OK = {"choices": [{"message": {"content": "X"}}]}


@pytest.fixture
def azure_config(config):
    config.providers.azure_openai.base_url = AZURE_BASE
    return config


def test_openai_request_shape_and_extraction(http, config):
    http.respond(CHAT_OK)
    adapter = for_provider("openai", config)

    assert adapter.generate("Hi", model="gpt-4o-mini", temperature=0.2) == "X"
    sent = http.last
    assert sent.url == "https://api.openai.com/v1/chat/completions"
    assert sent.headers["Authorization"] == "Bearer generic-key"
    assert sent.headers["Content-Type"] == "application/json"
    assert sent.json == {
        "model": "gpt-4o-mini",
        "messages": [{"role": "user", "content": "Hi"}],
        "temperature": 0.2,
    }
    assert sent.timeout == 30


def test_anthropic_request_shape_and_extraction(http, config):
    http.respond({"content": [{"type": "text", "text": "X"}]})
    config.providers.anthropic.api_key = "sk-ant"
    adapter = for_provider("anthropic", config)

    assert adapter.generate("Hi", model="claude-3-5-sonnet-20241022", temperature=0.5) == "X"
    sent = http.last
    assert sent.url == "https://api.anthropic.com/v1/messages"
    assert sent.headers["x-api-key"] == "sk-ant"
    assert sent.headers["anthropic-version"] == "2023-06-01"
    assert "Authorization" not in sent.headers
    assert sent.json["max_tokens"] == 4096
    assert sent.json["messages"] == [{"role": "user", "content": "Hi"}]
    assert sent.json["temperature"] == 0.5


def test_gemini_request_shape_and_extraction(http, config):
    http.respond({"candidates": [{"content": {"parts": [{"text": "X"}]}}]})
    config.providers.gemini.api_key = "g-key"
    adapter = for_provider("gemini", config)

    assert adapter.generate("Hi", model="gemini-pro", temperature=0.1) == "X"
    sent = http.last
    assert sent.url == "https://generativelanguage.googleapis.com/v1beta/models/gemini-pro:generateContent"
    assert sent.params == {"key": "g-key"}
    assert "Authorization" not in sent.headers
    assert sent.json == {
        "contents": [{"parts": [{"text": "Hi"}]}],
        "generationConfig": {"temperature": 0.1, "maxOutputTokens": 2048},
    }


def test_cohere_request_shape_and_extraction(http, config):
    http.respond({"generations": [{"text": "X"}]})
    adapter = for_provider("cohere", config)

    assert adapter.generate("Hi", model="command", temperature=0.3) == "X"
    sent = http.last
    assert sent.url == "https://api.cohere.ai/v1/generate"
    assert sent.headers["Authorization"] == "Bearer generic-key"
    assert sent.json == {"model": "command", "prompt": "Hi", "temperature": 0.3, "max_tokens": 2048}


def test_mistral_request_shape_and_extraction(http, config):
    http.respond(CHAT_OK)
    adapter = for_provider("mistral", config)

    assert adapter.generate("Hi", model="mistral-small-latest", temperature=0.7) == "X"
    sent = http.last
    assert sent.url == "https://api.mistral.ai/v1/chat/completions"
    assert sent.json["max_tokens"] == 2048
    assert sent.json["model"] == "mistral-small-latest"


def test_openrouter_attribution_headers_only_when_configured(http, config):
    http.respond(CHAT_OK)
    adapter = for_provider("openrouter", config)
    adapter.generate("Hi", model="openai/gpt-3.5-turbo")
    assert "HTTP-Referer" not in http.last.headers
    assert "X-Title" not in http.last.headers
    assert http.last.url == "https://openrouter.ai/api/v1/chat/completions"

    config.providers.openrouter.site_url = "https://example.com"
    config.providers.openrouter.app_name = "Example App"
    adapter = for_provider("openrouter", config)
    assert adapter.generate("Hi", model="openai/gpt-3.5-turbo") == "X"
    assert http.last.headers["HTTP-Referer"] == "https://example.com"
    assert http.last.headers["X-Title"] == "Example App"
    assert http.last.json["max_tokens"] == 2048


def test_azure_routes_to_configured_deployment(http, azure_config):
    http.respond(CHAT_OK)
    azure_config.providers.azure_openai.deployment_name = "prod-deploy"
    adapter = for_provider("azure", azure_config)

    assert adapter.generate("Hi", model="gpt-4", temperature=0.7) == "X"
    sent = http.last
    assert sent.url == f"{AZURE_BASE}/openai/deployments/prod-deploy/chat/completions"
    assert sent.params == {"api-version": "2024-02-15-preview"}
    assert sent.headers["api-key"] == "generic-key"
    assert "model" not in sent.json
    assert sent.json["max_tokens"] == 2048


def test_azure_falls_back_to_model_as_deployment(http, azure_config):
    http.respond(CHAT_OK)
    adapter = for_provider("azure_openai", azure_config)

    adapter.generate("Hi", model="gpt-4o")
    assert http.last.url == f"{AZURE_BASE}/openai/deployments/gpt-4o/chat/completions"


def test_azure_without_base_url_fails_before_any_request(http, config):
    with pytest.raises(ConfigurationError, match="base_url"):
        for_provider("azure", config)
    assert http.calls == []


@pytest.mark.parametrize("provider", [kind.value for kind in ProviderKind])
def test_every_adapter_falls_back_to_generic_key(provider, http, azure_config):
    http.respond({})
    adapter = for_provider(provider, azure_config)
    adapter.generate("Hi", model="m")

    sent = http.last
    observed = {
        sent.headers.get("Authorization"),
        sent.headers.get("x-api-key"),
        sent.headers.get("api-key"),
        (sent.params or {}).get("key"),
    }
    assert adapter.api_key == "generic-key"
    assert observed & {"Bearer generic-key", "generic-key"}


@pytest.mark.parametrize("provider", [kind.value for kind in ProviderKind])
def test_error_status_is_logged_once_and_returns_none(provider, http, azure_config, logger):
    http.respond({"error": {"message": "invalid key"}, "message": "invalid key"}, status_code=401)
    adapter = for_provider(provider, azure_config)

    assert adapter.generate("Hi", model="m") is None
    errors = logger.at("error")
    assert len(errors) == 1
    _, event, fields = errors[0]
    assert event == "provider_generate_failed"
    assert fields["provider"] == provider
    assert "invalid key" in fields["error"]


@pytest.mark.parametrize("provider", [kind.value for kind in ProviderKind])
def test_transport_failure_is_absorbed(provider, http, azure_config, logger):
    http.error = httpx.ConnectTimeout("timed out")
    adapter = for_provider(provider, azure_config)

    assert adapter.generate("Hi", model="m") is None
    assert len(logger.at("error")) == 1


def test_invalid_json_is_absorbed(http, config, logger):
    http.respond(invalid_json=True)
    adapter = for_provider("openai", config)

    assert adapter.generate("Hi", model="m") is None
    assert len(logger.at("error")) == 1


def test_error_status_without_json_body_reports_unknown_error(http, config, logger):
    http.respond(status_code=502, invalid_json=True)
    adapter = for_provider("cohere", config)

    assert adapter.generate("Hi", model="command") is None
    assert "unknown error" in logger.at("error")[0][2]["error"]


@pytest.mark.parametrize("provider", [kind.value for kind in ProviderKind])
def test_missing_extraction_path_returns_none_without_logging(provider, http, azure_config, logger):
    http.respond({"choices": [], "content": [], "candidates": [], "generations": []})
    adapter = for_provider(provider, azure_config)

    assert adapter.generate("Hi", model="m") is None
    assert logger.at("error") == []


def test_format_does_not_change_request(http, config):
    http.respond(CHAT_OK)
    adapter = for_provider("openai", config)

    adapter.generate("Hi", model="m", format=OutputFormat.TEXT)
    text_body = http.last.json
    adapter.generate("Hi", model="m", format=OutputFormat.JSON)
    assert http.last.json == text_body


def test_adapter_snapshots_configuration(http, config):
    http.respond(CHAT_OK)
    adapter = for_provider("openai", config)
    config.api_key = "rotated"
    config.providers.openai.base_url = "https://elsewhere/v1"
    config.timeout_seconds = 5

    adapter.generate("Hi", model="m")
    assert http.last.headers["Authorization"] == "Bearer generic-key"
    assert http.last.url == "https://api.openai.com/v1/chat/completions"
    assert http.last.timeout == 30


def test_base_url_trailing_slash_is_trimmed(http, config):
    http.respond(CHAT_OK)
    config.providers.openai.base_url = "http://localhost:11434/v1/"
    adapter = for_provider("openai", config)

    adapter.generate("Hi", model="m")
    assert http.last.url == "http://localhost:11434/v1/chat/completions"
