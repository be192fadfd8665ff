# Copyright Amazon.com Inc. or its affiliates.
# SPDX-License-Identifier: MIT-0

"""
S3 module used to retrieve and publish Lambda payloads
"""

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .logger import configure_logger


LOGGER = configure_logger(__name__)
ZIP_CONTENT_TYPE = 'application/zip'


class ObjectNotFoundError(Exception):
    """
    The requested object does not exist or could not be read
    """

    def __init__(self, bucket, key):
        self.bucket = bucket
        self.key = key
        super().__init__(f"Unable to read s3://{bucket}/{key}")


class ObjectStoreError(Exception):
    """
    Writing the object to the bucket failed
    """

    def __init__(self, bucket, key, reason):
        self.bucket = bucket
        self.key = key
        super().__init__(f"Unable to write s3://{bucket}/{key}: {reason}")


class S3:
    """
    Class used for modeling the S3 buckets that hold Lambda payloads
    """

    def __init__(self, client=None):
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client('s3')
        return self._client

    def fetch(self, bucket, key):
        """
        Read the full body of an object.

        Args:
            bucket (str): The bucket holding the object.

            key (str): The object key.

        Returns:
            bytes: The object contents.

        Raises:
            ObjectNotFoundError: When the object is missing or unreadable.
        """
        LOGGER.debug("Retrieving s3://%s/%s", bucket, key)
        try:
            response = self.client.get_object(Bucket=bucket, Key=key)
            return response['Body'].read()
        except (ClientError, BotoCoreError) as error:
            LOGGER.error(
                "Failed to retrieve s3://%s/%s", bucket, key,
                exc_info=True,
            )
            raise ObjectNotFoundError(bucket, key) from error

    def store(self, bucket, key, body):
        """
        Put the bytes as a zip object in the bucket.

        Args:
            bucket (str): The destination bucket.

            key (str): The destination object key.

            body (bytes): The zip file contents.

        Returns:
            dict: The put_object response.

        Raises:
            ObjectStoreError: When the upload did not succeed.
        """
        LOGGER.info(
            "Uploading %d bytes to s3://%s/%s", len(body), bucket, key,
        )
        try:
            response = self.client.put_object(
                Bucket=bucket,
                Key=key,
                Body=body,
                ContentType=ZIP_CONTENT_TYPE,
            )
        except (ClientError, BotoCoreError) as error:
            LOGGER.error("Failed to upload %s", key, exc_info=True)
            raise ObjectStoreError(bucket, key, error) from error
        LOGGER.debug("Upload of %s was successful.", key)
        return response
