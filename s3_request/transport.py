# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from urllib3.connection import HTTPSConnection

from ._http import METADATA_PREFIX, Fields
from ._io import ResponseBodyStream, close_quietly, upload_chunks
from .classifier import ResponseClassifier
from .config import TransportConfig
from .exceptions import RequestAlreadyProcessedError
from .interfaces.http import HTTPConnection, HTTPResponse
from .interfaces.identity import S3CredentialsIdentity
from .interfaces.io import ByteStream, UploadProgress
from .interfaces.sink import ResultSink
from .signers import DEFAULT_CONTENT_TYPE, SigV2Signer, canonical_string, http_date

logger = logging.getLogger(__name__)

type ConnectionFactory = Callable[[str, TransportConfig], HTTPConnection]


class S3Method(Enum):
    GET = "GET"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"


@dataclass(kw_only=True, frozen=True)
class RequestContent:
    """A request body and the headers describing it."""

    stream: ByteStream
    content_length: int
    content_md5: str | None = None
    content_type: str | None = None


def open_connection(host: str, config: TransportConfig) -> HTTPSConnection:
    """Open an unpooled, certificate-verifying HTTPS connection to ``host``."""
    kwargs: dict[str, Any] = {}
    if config.timeout is not None:
        kwargs["timeout"] = config.timeout
    return HTTPSConnection(
        host,
        port=config.port,
        cert_reqs="CERT_REQUIRED",
        ca_certs=config.resolve_ca_certs(),
        **kwargs,
    )


class S3Request:
    """A single signed call to S3.

    The ``Date`` of the request is captured when it's created. Headers, the query
    string, the body and the upload progress callback may be set until the request
    is processed. A request can only be processed once.
    """

    signer = SigV2Signer()

    def __init__(
        self,
        method: S3Method | str,
        path: str,
        *,
        date: datetime | None = None,
    ) -> None:
        """
        :param method: One of ``GET``, ``PUT``, ``DELETE`` or ``HEAD``.
        :param path: The resource path, for example ``/bucket/key``. It may carry a
            query of its own, such as ``/bucket?acl``.
        :param date: Overrides the time the request is dated with.
        """
        if isinstance(method, str):
            method = S3Method(method.upper())
        self._method = method
        self._path = path
        self._date = http_date(date)
        self._fields = Fields()
        self._query_string: str | None = None
        self._content: RequestContent | None = None
        self._progress: UploadProgress | None = None
        self._processed = False

    @property
    def method(self) -> S3Method:
        return self._method

    @property
    def path(self) -> str:
        return self._path

    @property
    def query_string(self) -> str:
        return self._query_string or ""

    @property
    def date(self) -> str:
        """The ``Date`` header value, as signed."""
        return self._date

    @property
    def fields(self) -> Fields:
        """The signed ``x-amz-*`` headers, including metadata."""
        return self._fields

    @property
    def content(self) -> RequestContent | None:
        return self._content

    @property
    def resource(self) -> str:
        """The path and query string the request is sent to."""
        if self._query_string is None:
            return self._path
        return f"{self._path}?{self._query_string}"

    def set_query_string(self, query_string: str | None) -> None:
        self._check_unprocessed()
        self._query_string = query_string

    def set_content(
        self,
        stream: ByteStream,
        *,
        content_length: int,
        content_md5: str | None = None,
        content_type: str | None = None,
    ) -> None:
        """Attach a request body.

        :param stream: Read in chunks while the request is sent, then closed.
        :param content_length: The exact number of bytes ``stream`` will provide.
        :param content_md5: Base64 encoded MD5 of the body, if known.
        :param content_type: Defaults to ``application/x-www-form-urlencoded``.
        """
        self._check_unprocessed()
        if content_length < 0:
            raise ValueError(f"Invalid content length: {content_length}")
        self._content = RequestContent(
            stream=stream,
            content_length=content_length,
            content_md5=content_md5,
            content_type=content_type,
        )

    def set_upload_progress(self, progress: UploadProgress | None) -> None:
        """Register a callback consulted after every chunk of the body is written.

        Returning a falsy value from the callback aborts the upload.
        """
        self._check_unprocessed()
        self._progress = progress

    def add_metadata(self, key: str, value: str) -> None:
        """Add a value to the ``x-amz-meta-{key}`` header."""
        self.add_header(f"{METADATA_PREFIX}{key}", value)

    def add_header(self, name: str, value: str) -> None:
        """Add a value to a signed header, for example ``x-amz-acl``.

        Values of the same header are sent, and signed, as one comma-separated value.
        """
        self._check_unprocessed()
        self._fields.add(name, value)

    def string_to_sign(self) -> str:
        """The canonical string this request is signed with.

        Useful to track down signature mismatches reported by the service.
        """
        return canonical_string(**self._signing_inputs())

    def process(
        self,
        credential: S3CredentialsIdentity,
        sink: ResultSink,
        close_connection: bool = True,
        *,
        config: TransportConfig | None = None,
        connection_factory: ConnectionFactory = open_connection,
    ) -> bool:
        """Sign and send the request, reporting the outcome to ``sink``.

        :param credential: The keys to sign with and the host to call.
        :param sink: Receives headers, metadata, the outcome and the response body.
        :param close_connection: When ``False`` the stream passed to
            ``sink.on_body`` owns the connection and may be read after this method
            returns; the connection is closed once the stream is exhausted or closed.
            When ``True`` the stream is only valid during ``on_body``.
        :param config: Connection configuration.
        :param connection_factory: Opens the connection. Defaults to
            :py:func:`open_connection`.
        :returns: Whether the service answered with a 2xx status.
        """
        self._check_unprocessed()
        self._processed = True
        config = config or TransportConfig()
        classifier = ResponseClassifier(sink)

        connection: HTTPConnection | None = None
        response: HTTPResponse | None = None
        body_stream: ResponseBodyStream | None = None
        transferred = False
        try:
            headers = self._signed_headers(credential=credential, config=config)
            logger.debug(
                "Sending %s request for %s to %s",
                self._method.value,
                self.resource,
                credential.host,
            )
            connection = connection_factory(credential.host, config)
            connection.connect()
            connection.request(
                self._method.value,
                self.resource,
                body=self._body(),
                headers=headers,
                preload_content=False,
            )
            response = connection.getresponse()

            def open_body() -> ResponseBodyStream:
                nonlocal body_stream
                assert response is not None
                owner = None if close_connection else connection
                body_stream = ResponseBodyStream(response, owner)
                return body_stream

            succeeded = classifier.classify(
                response, method=self._method.value, open_body=open_body
            )
            transferred = body_stream is not None and body_stream.owns_connection
            return succeeded
        except Exception as e:
            if classifier.has_outcome:
                raise
            logger.debug(
                "%s request for %s failed",
                self._method.value,
                self.resource,
                exc_info=True,
            )
            return classifier.fail(e)
        finally:
            if not transferred:
                _release(connection, response, body_stream)

    def _check_unprocessed(self) -> None:
        if self._processed:
            raise RequestAlreadyProcessedError(
                f"The {self._method.value} request for {self.resource} has already "
                "been processed."
            )

    def _signing_inputs(self) -> dict[str, Any]:
        content = self._content
        return {
            "method": self._method.value,
            "content_md5": content.content_md5 if content else None,
            # Some HTTP stacks add this content type on their own, so it's always
            # sent explicitly and signed.
            "content_type": (content and content.content_type) or DEFAULT_CONTENT_TYPE,
            "date": self._date,
            "fields": self._fields,
            "resource": self.resource,
        }

    def _signed_headers(
        self, *, credential: S3CredentialsIdentity, config: TransportConfig
    ) -> dict[str, str]:
        inputs = self._signing_inputs()
        authorization = self.signer.sign(identity=credential, **inputs)

        headers = {
            "Authorization": authorization,
            "Date": self._date,
            "User-Agent": config.resolve_user_agent(),
        }
        if inputs["content_md5"] is not None:
            headers["Content-MD5"] = inputs["content_md5"]
        headers["Content-Type"] = inputs["content_type"]
        content_length = self._content.content_length if self._content else 0
        headers["Content-Length"] = str(content_length)
        headers.update(self._fields.as_headers())
        return headers

    def _body(self) -> Iterator[bytes] | None:
        if self._content is None:
            return None
        return upload_chunks(self._content.stream, progress=self._progress)


def _release(
    connection: HTTPConnection | None,
    response: HTTPResponse | None,
    body_stream: ResponseBodyStream | None,
) -> None:
    if body_stream is not None:
        close_quietly(body_stream, "response body")
        if body_stream.owns_connection:
            return
    else:
        close_quietly(response, "response")
    close_quietly(connection, "connection")
