# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from dataclasses import dataclass, field

from .interfaces.identity import S3CredentialsIdentity


@dataclass(kw_only=True)
class S3Credential(S3CredentialsIdentity):
    access_key_id: str
    secret_access_key: str = field(repr=False)
    host: str = "s3.amazonaws.com"
