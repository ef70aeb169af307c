# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""S3 Request signs and sends single, unpooled requests to Amazon S3 using AWS
Signature Version 2, reporting headers, metadata and outcome to a result sink."""

from __future__ import annotations

from ._http import Field, Fields
from ._identity import S3Credential
from ._io import ResponseBodyStream
from .config import TransportConfig
from .errors import ErrorResult
from .exceptions import (
    RequestAlreadyProcessedError,
    S3RequestException,
    SigningConfigurationError,
    UploadAbortedError,
)
from .signers import SigV2Signer, canonical_string, content_md5, http_date
from .sinks import CollectingSink, Failure, Raised, Success
from .transport import S3Method, S3Request

__license__ = "Apache-2.0"
__version__ = "0.1.0"

__all__ = (
    "CollectingSink",
    "ErrorResult",
    "Failure",
    "Field",
    "Fields",
    "Raised",
    "RequestAlreadyProcessedError",
    "ResponseBodyStream",
    "S3Credential",
    "S3Method",
    "S3Request",
    "S3RequestException",
    "SigV2Signer",
    "SigningConfigurationError",
    "Success",
    "TransportConfig",
    "UploadAbortedError",
    "canonical_string",
    "content_md5",
    "http_date",
)
