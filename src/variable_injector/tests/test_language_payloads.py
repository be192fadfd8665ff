# Copyright Amazon.com Inc. or its affiliates.
# SPDX-License-Identifier: MIT-0

# pylint: skip-file

import json
import os

import pytest
from mock import patch

from ..language_payloads import (
    HANDLED_LANGUAGES,
    GeneratedFile,
    allowed_languages,
    get_emitter,
    register_language,
)
from ..language_payloads.node import handle_node_lambda
from ..language_payloads.python import handle_python_lambda

TRICKY_VALUES = {
    "QUOTES": 'say "hi" and \'bye\'',
    "BACKSLASH": "C:\\temp\\new\\",
    "NEWLINES": "line one\nline two\r\n\ttabbed",
    "TEMPLATE": "{{ not_a_variable }} {% if %}",
    "CODE": "'); import sys; sys.exit(1) #",
    "UNICODE": "caf\u00e9 \U0001F600 \u2028",
    "CONTROL": "\x01\x1b[0m\x7f",
    "EMPTY": "",
}


def exec_python_env_file(contents):
    # Compile first, so a syntax error fails the test before exec
    code = compile(contents, "env.py", "exec")
    exec(code, {})


def node_env_vars(contents):
    prefix = "const envVars = "
    start = contents.index(prefix) + len(prefix)
    end = contents.index(";\n\nfor (const")
    return json.loads(contents[start:end])


def test_handled_languages():
    assert allowed_languages() == ["node", "python"]
    assert get_emitter("node") is handle_node_lambda
    assert get_emitter("python") is handle_python_lambda
    assert get_emitter("ruby") is None


def test_handled_languages_is_read_only():
    with pytest.raises(TypeError):
        HANDLED_LANGUAGES["ruby"] = handle_node_lambda


def test_register_language_twice_is_rejected():
    with pytest.raises(ValueError):
        register_language("node")(handle_python_lambda)
    assert get_emitter("node") is handle_node_lambda


def test_node_default_file_name():
    env_file = handle_node_lambda({"API_URL": "https://x.test"})
    assert isinstance(env_file, GeneratedFile)
    assert env_file.name == "env.js"


def test_node_custom_file_name():
    env_file = handle_node_lambda({}, "config/env.js")
    assert env_file.name == "config/env.js"


def test_node_contents():
    env_file = handle_node_lambda({"API_URL": "https://x.test"})
    assert env_file.contents == (
        'const envVars = {\n'
        '  "API_URL": "https://x.test"\n'
        '};\n'
        '\n'
        'for (const [key, val] of Object.entries(envVars)) {\n'
        '  process.env[key] = val;\n'
        '}\n'
        '\n'
        'module.exports = envVars;\n'
    )


def test_node_exports_the_defined_mapping():
    env_file = handle_node_lambda({"A": "b"})
    assert "module.exports = envVars;" in env_file.contents
    assert "envVar;" not in env_file.contents


def test_node_escapes_values():
    env_file = handle_node_lambda(TRICKY_VALUES)
    assert node_env_vars(env_file.contents) == TRICKY_VALUES


def test_node_empty_mapping():
    env_file = handle_node_lambda({})
    assert node_env_vars(env_file.contents) == {}


def test_python_default_file_name():
    env_file = handle_python_lambda({"DB": "pg://h/d"})
    assert env_file.name == "env.py"


def test_python_custom_file_name():
    env_file = handle_python_lambda({"DB": "pg://h/d"}, "settings.py")
    assert env_file.name == "settings.py"


def test_python_sets_environment():
    env_file = handle_python_lambda({"DB": "pg://h/d"})
    with patch.dict(os.environ, {}, clear=False):
        exec_python_env_file(env_file.contents)
        assert os.environ["DB"] == "pg://h/d"


def test_python_escapes_values():
    env_file = handle_python_lambda(TRICKY_VALUES)
    with patch.dict(os.environ, {}, clear=False):
        exec_python_env_file(env_file.contents)
        for key, value in TRICKY_VALUES.items():
            assert os.environ[key] == value


def test_python_empty_mapping():
    env_file = handle_python_lambda({})
    with patch.dict(os.environ, {}, clear=False):
        exec_python_env_file(env_file.contents)
