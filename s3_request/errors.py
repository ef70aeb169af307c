# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass
from xml.etree import ElementTree as ET

from .exceptions import MalformedErrorResponseError

XML_CONTENT_TYPE = "application/xml"


@dataclass(kw_only=True)
class ErrorResult:
    """Details of a non-2xx response."""

    status: int
    """The HTTP status code of the response."""

    message: str = ""
    """The error message, or the raw response body when it wasn't structured."""

    code: str | None = None
    """The S3 error code, for example ``NoSuchKey``."""

    request_id: str | None = None
    """The request id reported in the error body."""

    host_id: str | None = None
    """The secondary id reported in the error body."""

    resource: str | None = None
    """The bucket or object the error relates to, if reported."""


def is_structured_error(content_type: str | None, body: str) -> bool:
    """Whether an error body should be parsed as XML rather than kept as text."""
    return content_type == XML_CONTENT_TYPE and len(body) > 2


def parse_error(status: int, body: str) -> ErrorResult:
    """Parse an S3 XML error document.

    S3 reports errors in the form::

        <Error>
            <Code>NoSuchKey</Code>
            <Message>The resource you requested does not exist</Message>
            <Resource>/mybucket/myfoto.jpg</Resource>
            <RequestId>4442587FB7D0A2F9</RequestId>
            <HostId>...</HostId>
        </Error>

    :param status: The HTTP status code of the response.
    :param body: The decoded response body.
    :raises MalformedErrorResponseError: If the body isn't well-formed XML.
    """
    try:
        element = ET.fromstring(body)
    except ET.ParseError as e:
        raise MalformedErrorResponseError(
            f"Could not parse error response body: {e}"
        ) from e

    values: dict[str, str] = {}
    for child in element:
        values[_local_name(child.tag)] = (child.text or "").strip()

    return ErrorResult(
        status=status,
        message=values.get("Message", ""),
        code=values.get("Code"),
        request_id=values.get("RequestId"),
        host_id=values.get("HostId"),
        resource=values.get("Resource"),
    )


def _local_name(tag: str) -> str:
    # Drop any "{namespace}" prefix.
    return tag.rpartition("}")[2]
