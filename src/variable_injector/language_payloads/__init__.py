# Copyright Amazon.com Inc. or its affiliates.
# SPDX-License-Identifier: MIT-0

"""
Environment file emitters, one per supported payload language.

An emitter is a function that takes the environment variables and an optional
file name and returns the GeneratedFile to add to the Lambda payload. Emitters
register themselves with the register_language decorator when their module is
imported.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional

import jinja2

HERE = Path(__file__).parent
TEMPLATES = HERE / "templates"


@dataclass(frozen=True)
class GeneratedFile:
    name: str
    contents: str


EnvFileEmitter = Callable[[Mapping[str, str], Optional[str]], GeneratedFile]

_LANGUAGES: Dict[str, EnvFileEmitter] = {}
HANDLED_LANGUAGES: Mapping[str, EnvFileEmitter] = MappingProxyType(_LANGUAGES)


def register_language(language: str):
    """
    Register the decorated function as the emitter for the given
    payload language.
    """
    def decorator(emitter: EnvFileEmitter) -> EnvFileEmitter:
        tag = language.lower()
        if tag in _LANGUAGES:
            raise ValueError(f"Language '{tag}' is registered already")
        _LANGUAGES[tag] = emitter
        return emitter
    return decorator


def allowed_languages() -> List[str]:
    return sorted(HANDLED_LANGUAGES)


def get_emitter(language: str) -> Optional[EnvFileEmitter]:
    return HANDLED_LANGUAGES.get(language)


def env_vars_literal(env_params: Mapping[str, str]) -> str:
    """
    Serialize the environment variables as a JSON object. The result is a
    valid object literal in JavaScript and a valid dict literal in Python
    for string to string mappings.

    Non-ASCII characters are kept as is, as \\u escaped surrogate pairs
    would decode to lone surrogates in Python.
    """
    return json.dumps(dict(env_params), indent=2, ensure_ascii=False)


def render_env_file(template_name: str, env_params: Mapping[str, str]) -> str:
    template = TEMPLATES / template_name
    return jinja2.Template(
        template.read_text(encoding="utf-8"),
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
    ).render(env_vars=env_vars_literal(env_params))


# pylint: disable=wrong-import-position
from . import node, python  # noqa: E402,F401
