# Copyright Amazon.com Inc. or its affiliates.
# SPDX-License-Identifier: MIT-0

"""
Environment file for Python Lambda functions
"""

from . import GeneratedFile, register_language, render_env_file

DEFAULT_ENV_FILE_NAME = 'env.py'


@register_language('python')
def handle_python_lambda(env_params, env_file_name=None):
    return GeneratedFile(
        name=env_file_name or DEFAULT_ENV_FILE_NAME,
        contents=render_env_file('env.py.j2', env_params),
    )
