# Copyright Amazon.com Inc. or its affiliates.
# SPDX-License-Identifier: MIT-0

"""
A collection of all Error Types raised by the variable injector
"""

from cfn_custom_resource import ResourceError


class VariableInjectorError(ResourceError):
    """
    Base class for exceptions in this package. The custom resource reports
    the message of a ResourceError as the reason of the FAILED response.
    """


class MissingPropertyError(VariableInjectorError):
    """
    A required ResourceProperty was not provided
    """

    def __init__(self, property_name, message=None):
        self.property_name = property_name
        super().__init__(
            message
            or f"Was not provided the '{property_name}' ResourceProperty."
        )


class PropertyTypeError(VariableInjectorError):
    """
    A ResourceProperty was provided, but has the wrong type or shape
    """

    def __init__(self, property_name, message):
        self.property_name = property_name
        super().__init__(message)


class InvalidEnvironmentFileError(PropertyTypeError):
    """
    The EnvironmentFile is not a relative path inside the payload
    """

    def __init__(self, env_file_name):
        self.env_file_name = env_file_name
        super().__init__(
            'EnvironmentFile',
            "The 'EnvironmentFile' property must be a relative path "
            "without '..' segments that points to a file. "
            f"Provided: '{env_file_name}'",
        )


class UnsupportedLanguageError(VariableInjectorError):
    """
    The PayloadLanguage has no registered environment file emitter
    """

    def __init__(self, language, allowed):
        self.language = language
        self.allowed = list(allowed)
        formatted_allowed = ', '.join(f"'{lang}'" for lang in self.allowed)
        super().__init__(
            "Unrecognized 'PayloadLanguage' provided. "
            f"Provided: '{language}'. Allowed: [{formatted_allowed}]"
        )


class LambdaPayloadNotFoundError(VariableInjectorError):
    """
    The source Lambda payload could not be retrieved from S3
    """

    def __init__(self, bucket, key):
        self.bucket = bucket
        self.key = key
        super().__init__(
            f"Could not find zip file in S3. Bucket: '{bucket}', Key: '{key}'"
        )


class MalformedArchiveError(VariableInjectorError):
    """
    Raised when the bytes of a Lambda payload cannot be read as a zip file
    """

    def __init__(self, message, bucket=None, key=None):
        self.bucket = bucket
        self.key = key
        super().__init__(message)


class EnvironmentFileWriteError(VariableInjectorError):
    """
    Generating the environment file or adding it to the payload failed
    """

    def __init__(self, env_file_name, reason):
        self.env_file_name = env_file_name
        super().__init__(
            f"Failed to write environment file '{env_file_name}' to zip. "
            f"Error: {reason}"
        )


class UploadFailureError(VariableInjectorError):
    """
    The modified Lambda payload could not be written to the output bucket
    """

    def __init__(self, reason, source, destination):
        self.source = source
        self.destination = destination
        src_bucket, src_key = source
        new_bucket, new_key = destination
        super().__init__(
            f"Failed to upload new zip. Error: {reason}. "
            f"SrcBucket: '{src_bucket}', SrcKey: '{src_key}', "
            f"NewBucket: '{new_bucket}', NewKey: '{new_key}'"
        )
