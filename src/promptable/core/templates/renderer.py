"""Prompt rendering.

Templates use ``%<name>s``-style placeholders (any printf conversion after the
name, e.g. ``%<count>03d``) and ``%{name}`` placeholders; ``%%`` is a literal
percent sign. Rendering never fails because a key is missing: when the context
lacks a referenced key, only the keys that are present get substituted and the
rest of the template passes through untouched. A value that does not fit its
conversion (``%<n>d`` with a word) is inserted as plain text.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

_PLACEHOLDER = re.compile(
    r"%(?:"
    r"(?P<escape>%)"
    r"|<(?P<named>\w+)>(?P<spec>[-+ #0]*\d*(?:\.\d+)?[sdiouxXeEfFgGr])"
    r"|\{(?P<braced>\w+)\}"
    r")"
)


def _coerce_context(context: Mapping[Any, Any] | None) -> dict[str, Any]:
    return {str(key): value for key, value in (context or {}).items()}


def _format_named(spec: str, value: Any) -> str:
    try:
        return ("%" + spec) % (value,)
    except (TypeError, ValueError):
        return str(value)


def _substitute_strict(template: str, values: dict[str, Any]) -> str:
    def _replace(match: re.Match[str]) -> str:
        if match.group("escape"):
            return "%"
        named = match.group("named")
        if named is not None:
            return _format_named(match.group("spec"), values[named])
        return str(values[match.group("braced")])

    return _PLACEHOLDER.sub(_replace, template)


def _substitute_present(template: str, values: dict[str, Any]) -> str:
    def _replace(match: re.Match[str]) -> str:
        named = match.group("named")
        if named is not None and named in values:
            return _format_named(match.group("spec"), values[named])
        braced = match.group("braced")
        if braced is not None and braced in values:
            return str(values[braced])
        return match.group(0)

    return _PLACEHOLDER.sub(_replace, template)


def render(template: str | None, context: Mapping[Any, Any] | None = None) -> str:
    if not template:
        return ""
    values = _coerce_context(context)
    try:
        return _substitute_strict(template, values)
    except KeyError:
        return _substitute_present(template, values)
