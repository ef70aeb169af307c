# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging
from collections.abc import Callable
from typing import BinaryIO

from ._http import split_metadata_name
from .errors import ErrorResult, is_structured_error, parse_error
from .exceptions import MalformedErrorResponseError
from .interfaces.http import HTTPResponse
from .interfaces.sink import ResultSink

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "x-amz-request-id"
ID2_HEADER = "x-amz-id-2"
CONTENT_TYPE_HEADER = "Content-Type"
NO_CONTENT = 204


class ResponseClassifier:
    """Turns a response into :py:class:`ResultSink` callbacks.

    A classifier serves a single call. It remembers whether a terminal callback
    (``on_success``, ``on_error`` or ``on_exception``) was made so that no second
    one can follow it.
    """

    def __init__(self, sink: ResultSink) -> None:
        self._sink = sink
        self._has_outcome = False

    @property
    def has_outcome(self) -> bool:
        """Whether a terminal callback has already been made."""
        return self._has_outcome

    def classify(
        self,
        response: HTTPResponse,
        *,
        method: str,
        open_body: Callable[[], BinaryIO],
    ) -> bool:
        """Dispatch the headers and outcome of ``response``.

        :param response: The response, with its body not yet read.
        :param method: The HTTP method of the request.
        :param open_body: Builds the stream handed to ``on_body``.
        :returns: Whether the status was 2xx.
        """
        status = response.status
        headers = response.headers
        request_id = headers.get(REQUEST_ID_HEADER)
        id2 = headers.get(ID2_HEADER)
        logger.debug("Received response status %s (request id %s)", status, request_id)

        for key, value in headers.iteritems():
            metadata_key = split_metadata_name(key)
            if metadata_key is None:
                self._sink.on_header(key, value)
            else:
                self._sink.on_metadata(metadata_key, value)

        if 200 <= status < 300:
            self._has_outcome = True
            self._sink.on_success(status, request_id, id2)
            if method != "HEAD" and status != NO_CONTENT:
                self._sink.on_body(open_body())
            return True

        error = self._read_error(
            status=status,
            response=response,
            content_type=headers.get(CONTENT_TYPE_HEADER),
        )
        self._has_outcome = True
        self._sink.on_error(status, error, request_id, id2)
        return False

    def fail(self, exc: Exception) -> bool:
        """Report a failure that happened before any outcome was dispatched."""
        if self._has_outcome:
            raise RuntimeError(
                "An outcome was already dispatched for this request."
            ) from exc
        self._has_outcome = True
        self._sink.on_exception(exc)
        return False

    def _read_error(
        self, *, status: int, response: HTTPResponse, content_type: str | None
    ) -> ErrorResult:
        body = response.read().decode("utf-8", errors="replace")
        if body:
            logger.debug("Error response body: %s", body)

        if is_structured_error(content_type, body):
            try:
                return parse_error(status, body)
            except MalformedErrorResponseError:
                logger.debug("Keeping unparseable error body as text", exc_info=True)
        return ErrorResult(status=status, message=body)
