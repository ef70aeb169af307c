# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0


class S3RequestException(Exception):
    """Top-level exception to capture errors raised by s3-request."""


class SigningConfigurationError(S3RequestException):
    """The runtime can't produce HMAC-SHA1 signatures.

    This is a fatal configuration problem, not something a retry can fix.
    """


class UploadAbortedError(S3RequestException, IOError):
    """The upload progress callback asked for the transfer to stop."""


class RequestAlreadyProcessedError(S3RequestException, RuntimeError):
    """An S3Request was modified or processed after it had been processed."""


class MalformedErrorResponseError(S3RequestException, ValueError):
    """An error response body claimed to be XML but couldn't be parsed."""
