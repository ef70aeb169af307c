# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import io
import logging
from collections.abc import Iterator
from typing import Any

from .exceptions import UploadAbortedError
from .interfaces.http import HTTPConnection, HTTPResponse
from .interfaces.io import ByteStream, UploadProgress

logger = logging.getLogger(__name__)

# Request bodies are written to the connection in chunks of this size.
UPLOAD_CHUNK_SIZE = 1024


def close_quietly(resource: Any, description: str) -> None:
    """Close ``resource``, logging and discarding any error.

    Used on cleanup paths where a close failure must not hide the outcome that was
    already reported.
    """
    if resource is None:
        return
    try:
        resource.close()
    except Exception:
        logger.debug("Error closing %s", description, exc_info=True)


def upload_chunks(
    source: ByteStream,
    *,
    progress: UploadProgress | None = None,
    chunk_size: int = UPLOAD_CHUNK_SIZE,
) -> Iterator[bytes]:
    """Read ``source`` in chunks for the connection to write one at a time.

    The generator resumes once the connection has written the previous chunk, so
    ``progress`` is consulted after every write and never in the middle of one.
    The source is closed when the generator finishes, fails or is aborted.

    :param source: The request body.
    :param progress: Called with the length of each written chunk. A falsy return
        value stops the upload with :py:class:`UploadAbortedError`.
    :param chunk_size: The maximum number of bytes read and written at a time.
    """
    uploaded = 0
    try:
        logger.debug("Starting upload of request body")
        while chunk := source.read(chunk_size):
            yield chunk
            uploaded += len(chunk)
            if progress is not None and not progress(len(chunk)):
                logger.debug("Upload aborted after %s bytes", uploaded)
                raise UploadAbortedError("upload aborted")
        logger.debug("Upload finished after %s bytes", uploaded)
    finally:
        close_quietly(source, "request body")


class ResponseBodyStream(io.RawIOBase):
    """A readable response body that releases its resources exactly once.

    When created with a ``connection`` the stream owns it: the response and the
    connection are closed as soon as the body is exhausted or the stream is closed,
    whichever happens first. This lets a consumer keep reading after
    :py:meth:`S3Request.process` has returned.
    """

    def __init__(
        self, response: HTTPResponse, connection: HTTPConnection | None = None
    ) -> None:
        super().__init__()
        self._response = response
        self._connection = connection
        self._owns_connection = connection is not None
        self._released = False

    @property
    def owns_connection(self) -> bool:
        """Whether closing this stream also closes the connection."""
        return self._owns_connection

    @property
    def released(self) -> bool:
        """Whether the underlying response has been closed."""
        return self._released

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: Any) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed file.")
        if self._released:
            return 0
        data = self._response.read(len(buffer))
        if not data:
            self._release()
            return 0
        size = len(data)
        buffer[:size] = data
        return size

    def close(self) -> None:
        """Closes the stream, as well as the response and any owned connection."""
        if not self.closed:
            self._release()
        super().close()

    def _release(self) -> None:
        if self._released:
            return
        self._released = True
        close_quietly(self._response, "response")
        if self._connection is not None:
            logger.debug("Closing connection owned by response body")
            close_quietly(self._connection, "connection")
            self._connection = None
