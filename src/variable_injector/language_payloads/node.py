# Copyright Amazon.com Inc. or its affiliates.
# SPDX-License-Identifier: MIT-0

"""
Environment file for Node.js Lambda functions
"""

from . import GeneratedFile, register_language, render_env_file

DEFAULT_ENV_FILE_NAME = 'env.js'


@register_language('node')
def handle_node_lambda(env_params, env_file_name=None):
    """
    Generate a CommonJS module that copies the variables into process.env
    when it is required. The module exports the variables as well.
    """
    return GeneratedFile(
        name=env_file_name or DEFAULT_ENV_FILE_NAME,
        contents=render_env_file('env.js.j2', env_params),
    )
