# Copyright Amazon.com Inc. or its affiliates.
# SPDX-License-Identifier: MIT-0

"""Primary Logging Configuration Function
"""

import logging
import os

LOG_FORMAT = (
    '%(asctime)s | %(levelname)s | %(name)s | %(message)s '
    '| (%(filename)s:%(lineno)d)'
)


def configure_logger(logger_name):
    """Configures a generic logger which can be imported and used as needed
    """

    # Create logger and define INFO as the log level
    logger = logging.getLogger(logger_name)
    logger.setLevel(os.environ.get("LOG_LEVEL", logging.INFO))
    logger.propagate = False

    # Lambda reuses warm containers, only attach the handler once
    if logger.handlers:
        return logger

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(stream_handler)

    return logger
