# Copyright Amazon.com Inc. or its affiliates.
# SPDX-License-Identifier: MIT-0

# pylint: skip-file

import os

import pytest

# The boto3 clients must never pick up real credentials in tests.
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ.pop("OUTPUT_BUCKET", None)

from .stubs.stub_zip import build_zip  # noqa: E402


@pytest.fixture
def node_payload():
    return build_zip({
        "index.js": "exports.handler = async (event) => event;\n",
        "lib/util.js": b"module.exports = {};\n",
    })


@pytest.fixture
def python_payload():
    return build_zip({
        "handler.py": "def handler(event, ctx):\n    return event\n",
    })
