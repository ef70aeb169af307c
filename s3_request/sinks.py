# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass, field
from typing import BinaryIO

from .errors import ErrorResult
from .interfaces.sink import ResultSink


@dataclass(kw_only=True, frozen=True)
class Success:
    status: int
    request_id: str | None = None
    id2: str | None = None


@dataclass(kw_only=True, frozen=True)
class Failure:
    status: int
    error: ErrorResult
    request_id: str | None = None
    id2: str | None = None


@dataclass(kw_only=True, frozen=True)
class Raised:
    exception: Exception


type Outcome = Success | Failure | Raised


@dataclass(kw_only=True)
class CollectingSink(ResultSink):
    """A :py:class:`ResultSink` that records everything it receives.

    The outcome is kept as a tagged value instead of being spread across callbacks.
    With ``read_body`` set, the response body is read in full during ``on_body``,
    which makes the sink usable with connections closed by ``process``. Otherwise the
    stream itself is kept in ``stream`` for the caller to consume.
    """

    read_body: bool = True
    headers: list[tuple[str, str]] = field(default_factory=list)
    metadata: dict[str, list[str]] = field(default_factory=dict)
    outcome: Outcome | None = None
    body: bytes | None = None
    stream: BinaryIO | None = None

    def on_success(
        self, status: int, request_id: str | None, id2: str | None
    ) -> None:
        self._set_outcome(Success(status=status, request_id=request_id, id2=id2))

    def on_error(
        self,
        status: int,
        error: ErrorResult,
        request_id: str | None,
        id2: str | None,
    ) -> None:
        self._set_outcome(
            Failure(status=status, error=error, request_id=request_id, id2=id2)
        )

    def on_exception(self, exc: Exception) -> None:
        self._set_outcome(Raised(exception=exc))

    def on_header(self, key: str, value: str) -> None:
        self.headers.append((key, value))

    def on_metadata(self, key: str, value: str) -> None:
        self.metadata.setdefault(key, []).append(value)

    def on_body(self, stream: BinaryIO) -> None:
        if self.read_body:
            with stream:
                self.body = stream.read()
        else:
            self.stream = stream

    def _set_outcome(self, outcome: Outcome) -> None:
        if self.outcome is not None:
            raise RuntimeError(
                f"Received {outcome!r} after the outcome {self.outcome!r}."
            )
        self.outcome = outcome
