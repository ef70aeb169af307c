# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class S3CredentialsIdentity(Protocol):
    """Credentials and target of an S3 call."""

    access_key_id: str
    """A unique identifier for an AWS user or role."""

    secret_access_key: str
    """The secret used to sign requests.

    It's used as-is, encoded to UTF-8. It is never decoded from base64 or any other
    textual encoding before signing.
    """

    host: str
    """The host requests are sent to, for example ``s3.amazonaws.com``."""
