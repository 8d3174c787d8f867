from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from promptable.core.telemetry.logging import LogCapability, get_logger

YAML_SUFFIXES = (".yml", ".yaml")
READ_ERRORS = (yaml.YAMLError, UnicodeDecodeError, OSError)


def normalize_template_name(name: object) -> str:
    raw = name.value if isinstance(name, Enum) else name
    return str(raw).strip().lstrip(":")


def _template_from_entry(entry: Any) -> str | None:
    if isinstance(entry, dict):
        value = entry.get("template")
        return None if value is None else str(value)
    if entry is None:
        return None
    return str(entry)


class TemplateRegistry:
    """Named prompt templates, optionally bulk-loaded from YAML or plain files."""

    def __init__(self, logger: LogCapability | None = None) -> None:
        self._templates: dict[str, str] = {}
        self.logger = logger or get_logger("promptable.templates")

    def register(self, name: object, template: str) -> None:
        self._templates[normalize_template_name(name)] = template

    def get(self, name: object) -> str | None:
        return self._templates.get(normalize_template_name(name))

    def list(self) -> list[str]:
        return list(self._templates.keys())

    def clear(self) -> None:
        self._templates.clear()

    def __contains__(self, name: object) -> bool:
        return normalize_template_name(name) in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def load_from_source(self, source: str | Path) -> int:
        path = Path(source)
        if path.is_dir():
            return self.load_from_directory(path)
        return self.load_from_file(path)

    def load_from_file(self, file_path: str | Path) -> int:
        path = Path(file_path)
        if not path.is_file():
            return 0
        try:
            content = yaml.safe_load(path.read_text(encoding="utf-8"))
        except READ_ERRORS as exc:
            self.logger.warning("template_load_failed", path=str(path), error=str(exc))
            return 0
        if not isinstance(content, dict):
            self.logger.warning("template_load_skipped", path=str(path), reason="document is not a mapping")
            return 0

        loaded = 0
        for name, entry in content.items():
            template = _template_from_entry(entry)
            if template is None:
                continue
            self.register(name, template)
            loaded += 1
        return loaded

    def load_from_directory(self, directory_path: str | Path) -> int:
        directory = Path(directory_path)
        if not directory.is_dir():
            return 0

        loaded = 0
        for path in sorted(directory.iterdir()):
            if not path.is_file():
                continue
            try:
                text = path.read_text(encoding="utf-8")
                if path.suffix.lower() in YAML_SUFFIXES:
                    template = _template_from_entry(yaml.safe_load(text))
                else:
                    template = text
            except READ_ERRORS as exc:
                self.logger.warning("template_load_failed", path=str(path), error=str(exc))
                continue
            if template is None:
                continue
            self.register(path.stem, template)
            loaded += 1
        return loaded


default_registry = TemplateRegistry()
