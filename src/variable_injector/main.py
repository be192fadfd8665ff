# Copyright Amazon.com Inc. or its affiliates.
# SPDX-License-Identifier: MIT-0

"""
The Variable Injector main that is called by CloudFormation to create,
update or delete a Lambda payload with injected environment variables.

The Lambda function handler is variable_injector.main.lambda_handler.
"""

from typing import Any, Mapping, Tuple

from cfn_custom_resource import (  # pylint: disable=unused-import
    lambda_handler,
    create,
    update,
    delete,
)

from .handler import S3PayloadResponse, handle_create_and_update
from .logger import configure_logger

# Type aliases:
PhysicalResourceId = str
CloudFormationResponse = Tuple[PhysicalResourceId, S3PayloadResponse]

# The same id is returned on update, so CloudFormation updates the resource
# in place and never schedules a delete of the previous one.
PHYSICAL_RESOURCE_ID = 'lambda-edge-variable-injector'
LOGGER = configure_logger(__name__)


def inject_variables(event: Mapping[str, Any]) -> CloudFormationResponse:
    return PHYSICAL_RESOURCE_ID, handle_create_and_update(event)


@create()
def create_(event: Mapping[str, Any], _context: Any) -> CloudFormationResponse:
    return inject_variables(event)


@update()
def update_(event: Mapping[str, Any], _context: Any) -> CloudFormationResponse:
    return inject_variables(event)


def retain_payloads(event: Mapping[str, Any]) -> None:
    LOGGER.info(
        "Retaining generated payloads of %s on delete",
        event.get("LogicalResourceId"),
    )


@delete()
def delete_(event: Mapping[str, Any], _context: Any) -> None:
    retain_payloads(event)
