# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO, Protocol

if TYPE_CHECKING:
    from ..errors import ErrorResult


class ResultSink(Protocol):
    """Receives the outcome of :py:meth:`S3Request.process`.

    Exactly one of ``on_success``, ``on_error`` and ``on_exception`` is called per
    request. ``on_header`` and ``on_metadata`` may be called any number of times
    before it. ``on_body`` is called at most once, after ``on_success``, and never
    for ``HEAD`` requests or ``204`` responses.
    """

    def on_success(
        self, status: int, request_id: str | None, id2: str | None
    ) -> None:
        """The service answered with a 2xx status."""
        ...

    def on_error(
        self,
        status: int,
        error: ErrorResult,
        request_id: str | None,
        id2: str | None,
    ) -> None:
        """The service answered with a status outside of 2xx."""
        ...

    def on_exception(self, exc: Exception) -> None:
        """The call failed before a response could be classified."""
        ...

    def on_header(self, key: str, value: str) -> None:
        """A response header that isn't object metadata."""
        ...

    def on_metadata(self, key: str, value: str) -> None:
        """An ``x-amz-meta-`` response header, with the prefix removed."""
        ...

    def on_body(self, stream: BinaryIO) -> None:
        """The response body of a successful, non-HEAD request."""
        ...
