# Copyright Amazon.com Inc. or its affiliates.
# SPDX-License-Identifier: MIT-0

"""
Handles CloudFormation CREATE and UPDATE events to modify a provided Lambda
payload, injecting a file that loads the requested environment variables
into the payload for use.
"""

import os
from datetime import datetime, timezone
from typing import Any, Mapping, TypedDict

import jinja2

from .errors import (
    EnvironmentFileWriteError,
    LambdaPayloadNotFoundError,
    MalformedArchiveError,
    UnsupportedLanguageError,
    UploadFailureError,
)
from .lambda_zip import LambdaZip
from .language_payloads import allowed_languages, get_emitter
from .logger import configure_logger
from .properties import get_parameters
from .s3 import S3, ObjectNotFoundError, ObjectStoreError

# pylint: disable=invalid-name

LOGGER = configure_logger(__name__)
OUTPUT_BUCKET = os.environ.get("OUTPUT_BUCKET")
PAYLOAD_STORE = S3()

S3PayloadResponse = TypedDict("S3PayloadResponse", {
    "LambdaBucket": str,
    "LambdaKey": str,
})


def utc_timestamp() -> str:
    """
    ISO-8601 UTC timestamp with millisecond precision, for example:
    2024-01-31T09:15:42.123Z
    """
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec='milliseconds')
        .replace('+00:00', 'Z')
    )


def new_lambda_key(lambda_key: str, timestamp: str) -> str:
    return f"{lambda_key}--env/{timestamp}.zip"


def get_lambda_zip(lambda_bucket: str, lambda_key: str) -> LambdaZip:
    """
    Retrieve the Lambda payload zip file from S3 and load it for
    manipulation of the contents of the zip in memory.

    Args:
        lambda_bucket (str): The S3 bucket containing the Lambda payload zip.

        lambda_key (str): The S3 key of the Lambda payload zip.

    Returns:
        LambdaZip: The contents of the zip file.
    """
    try:
        lambda_zip_raw = PAYLOAD_STORE.fetch(lambda_bucket, lambda_key)
    except ObjectNotFoundError as error:
        raise LambdaPayloadNotFoundError(lambda_bucket, lambda_key) from error

    try:
        return LambdaZip.load(lambda_zip_raw)
    except MalformedArchiveError as error:
        LOGGER.error(
            "Failed to parse s3://%s/%s: %s", lambda_bucket, lambda_key, error,
        )
        raise MalformedArchiveError(
            "URL pointed to a file that could not be understood as a zip. "
            f"Bucket: '{lambda_bucket}', Key: '{lambda_key}'",
            bucket=lambda_bucket,
            key=lambda_key,
        ) from error


def inject_env_file(lambda_zip, payload_language, env_params, env_file_name):
    """
    Generate the environment file for the payload language and write it
    into the zip.

    Returns:
        GeneratedFile: The file that was written.
    """
    emitter = get_emitter(payload_language)
    if emitter is None:
        raise UnsupportedLanguageError(payload_language, allowed_languages())

    env_file = None
    try:
        env_file = emitter(env_params, env_file_name)
        lambda_zip.add_or_replace(env_file.name, env_file.contents)
    except (jinja2.TemplateError, OSError, TypeError, ValueError) as error:
        raise EnvironmentFileWriteError(
            env_file.name if env_file else env_file_name,
            error,
        ) from error
    return env_file


def handle_create_and_update(event: Mapping[str, Any]) -> S3PayloadResponse:
    """
    Inject the environment variable file into the Lambda payload referenced
    by the event and upload the result next to it under a new key.

    Args:
        event (dict): The CloudFormation custom resource event.

    Returns:
        S3PayloadResponse: The location of the uploaded payload, for use in
            other Lambda definitions.
    """
    # Output the ResponseURL in the logs, so when something breaks in a way
    # that is not handled we still have the URL to call to let CloudFormation
    # continue instead of waiting until it times out.
    LOGGER.info(
        "Will respond to CloudFormation with url: %s",
        event.get("ResponseURL"),
    )

    properties = get_parameters(
        event.get("ResourceProperties") or {},
        OUTPUT_BUCKET,
    )
    lambda_bucket = properties.LambdaBucket
    lambda_key = properties.LambdaKey
    output_bucket = properties.OutputBucket

    LOGGER.info(
        "Injecting %d %s environment variables into s3://%s/%s",
        len(properties.EnvironmentVariables),
        properties.PayloadLanguage,
        lambda_bucket,
        lambda_key,
    )
    lambda_zip = get_lambda_zip(lambda_bucket, lambda_key)
    env_file = inject_env_file(
        lambda_zip,
        properties.PayloadLanguage,
        properties.EnvironmentVariables,
        properties.EnvironmentFile,
    )
    LOGGER.debug("Wrote environment file %s into the zip", env_file.name)

    new_key = new_lambda_key(lambda_key, utc_timestamp())
    try:
        PAYLOAD_STORE.store(output_bucket, new_key, lambda_zip.serialize())
    except ObjectStoreError as error:
        raise UploadFailureError(
            error.__cause__ or error,
            source=(lambda_bucket, lambda_key),
            destination=(output_bucket, new_key),
        ) from error

    LOGGER.info(
        "Uploaded modified payload to s3://%s/%s", output_bucket, new_key,
    )
    return {
        "LambdaBucket": output_bucket,
        "LambdaKey": new_key,
    }
