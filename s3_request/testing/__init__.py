# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Shared utilities for testing code built on s3-request without a network."""

from .mockhttp import MockConnection, MockConnectionError, MockResponse

__all__ = (
    "MockConnection",
    "MockConnectionError",
    "MockResponse",
)
