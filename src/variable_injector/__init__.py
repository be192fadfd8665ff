# Copyright Amazon.com Inc. or its affiliates.
# SPDX-License-Identifier: MIT-0

"""
Custom resource that injects environment variables into Lambda payloads
"""
