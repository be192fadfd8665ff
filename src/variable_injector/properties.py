# Copyright Amazon.com Inc. or its affiliates.
# SPDX-License-Identifier: MIT-0

"""
Validation of the ResourceProperties provided to the custom resource
"""

from dataclasses import dataclass
from pathlib import PurePosixPath, PureWindowsPath
from typing import Any, Mapping, Optional

from .errors import (
    InvalidEnvironmentFileError,
    MissingPropertyError,
    PropertyTypeError,
    UnsupportedLanguageError,
)
from .language_payloads import allowed_languages

# pylint: disable=invalid-name

REQUIRED_PROPERTIES = (
    'LambdaBucket',
    'LambdaKey',
    'PayloadLanguage',
    'EnvironmentVariables',
)


@dataclass(frozen=True)
class CustomResourceProperties:
    OutputBucket: str
    LambdaBucket: str
    LambdaKey: str
    PayloadLanguage: str
    EnvironmentVariables: Mapping[str, str]
    EnvironmentFile: Optional[str] = None


def _is_missing(value: Any) -> bool:
    return value is None or value == ''


def _ensure_string(name: str, value: Any) -> None:
    if not isinstance(value, str):
        raise PropertyTypeError(name, f"Type of '{name}' must be a String")


def _ensure_env_params(env_params: Any) -> None:
    if not isinstance(env_params, Mapping):
        raise PropertyTypeError(
            'EnvironmentVariables',
            "The 'EnvironmentVariables' property must be an Object of "
            "KeyValue pairs.",
        )
    for key, value in env_params.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise PropertyTypeError(
                f'EnvironmentVariables.{key}',
                "EnvironmentVariables must be of type string. "
                f"'EnvironmentVariables.{key}' is not of type string.",
            )
        # The process environment cannot hold these names
        if not key or '=' in key or '\0' in key:
            raise PropertyTypeError(
                f'EnvironmentVariables.{key}',
                f"'EnvironmentVariables.{key}' is not a valid environment "
                "variable name. Names must not be empty or contain '=' "
                "or NUL characters.",
            )
        if '\0' in value:
            raise PropertyTypeError(
                f'EnvironmentVariables.{key}',
                f"The value of 'EnvironmentVariables.{key}' must not "
                "contain NUL characters.",
            )


def validate_env_file_name(env_file_name: Any) -> Optional[str]:
    """
    Return the EnvironmentFile to use, or None when the language default
    applies.

    Raises:
        PropertyTypeError: When the file name is not a string.

        InvalidEnvironmentFileError: When the file name is blank, an
            absolute path, has a drive prefix, contains a '..' segment,
            or points to a directory.
    """
    if _is_missing(env_file_name):
        return None
    _ensure_string('EnvironmentFile', env_file_name)
    if not env_file_name.strip() or PureWindowsPath(env_file_name).drive:
        raise InvalidEnvironmentFileError(env_file_name)
    path = PurePosixPath(env_file_name.replace('\\', '/'))
    if (
        not path.parts
        or path.is_absolute()
        or '..' in path.parts
        or env_file_name.endswith(('/', '\\'))
    ):
        raise InvalidEnvironmentFileError(env_file_name)
    return path.as_posix()


def get_parameters(
    properties: Mapping[str, Any],
    default_output_bucket: Optional[str] = None,
) -> CustomResourceProperties:
    """
    Process, validate, and return the parameters provided to the
    custom resource. The checks run in a fixed order and the first
    failure is raised.

    Args:
        properties (dict): The ResourceProperties of the event.

        default_output_bucket (str): The bucket to upload to when the
            OutputBucket property is not provided.

    Returns:
        CustomResourceProperties: The validated properties.

    Raises:
        MissingPropertyError: When a required property is absent.

        PropertyTypeError: When a property has the wrong type.

        UnsupportedLanguageError: When the PayloadLanguage has no emitter.
    """
    for name in REQUIRED_PROPERTIES:
        if _is_missing(properties.get(name)):
            raise MissingPropertyError(name)

    output_bucket = properties.get('OutputBucket')
    if _is_missing(output_bucket):
        output_bucket = default_output_bucket
    if _is_missing(output_bucket):
        raise MissingPropertyError(
            'OutputBucket',
            "No 'OutputBucket' was specified. One can be provided globally "
            "via the VariableInjector definition's "
            "EnvironmentVariables.OUTPUT_BUCKET or locally via "
            "CustomResource.Properties.OutputBucket",
        )

    for name in ('LambdaBucket', 'LambdaKey', 'PayloadLanguage'):
        _ensure_string(name, properties[name])
    _ensure_string('OutputBucket', output_bucket)

    env_params = properties['EnvironmentVariables']
    _ensure_env_params(env_params)

    payload_language = properties['PayloadLanguage']
    if payload_language not in allowed_languages():
        raise UnsupportedLanguageError(payload_language, allowed_languages())

    return CustomResourceProperties(
        OutputBucket=output_bucket,
        LambdaBucket=properties['LambdaBucket'],
        LambdaKey=properties['LambdaKey'],
        PayloadLanguage=payload_language,
        EnvironmentVariables=dict(env_params),
        EnvironmentFile=validate_env_file_name(
            properties.get('EnvironmentFile'),
        ),
    )
