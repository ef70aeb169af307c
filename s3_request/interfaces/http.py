# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from urllib3 import HTTPHeaderDict


class Field(Protocol):
    """A name with an ordered list of values, sent as a single HTTP header.

    Field names are case insensitive. The spelling the field was created with is
    preserved for transmission.
    """

    name: str
    values: list[str]

    def add(self, value: str) -> None:
        """Append a value to a field."""
        ...

    def set(self, values: list[str]) -> None:
        """Overwrite existing field values."""
        ...

    def remove(self, value: str) -> None:
        """Remove all matching entries from list."""
        ...

    def as_string(self) -> str:
        """Serialize the ``Field``'s values into a single line string."""
        ...

    def as_tuples(self) -> list[tuple[str, str]]:
        """Get list of ``name``, ``value`` tuples where each tuple represents one
        value."""
        ...


class Fields(Protocol):
    """Case-insensitive mapping of field names to ``Field``s, kept in insertion
    order."""

    # Entries are keyed off the lower-cased name of a provided Field
    entries: OrderedDict[str, Field]

    def set_field(self, field: Field) -> None:
        """Alias for __setitem__ to utilize the field.name for the entry key."""
        ...

    def add(self, name: str, value: str) -> None:
        """Append ``value`` to the field called ``name``, creating it if needed."""
        ...

    def __setitem__(self, name: str, field: Field) -> None:
        """Set entry for a Field name."""
        ...

    def __getitem__(self, name: str) -> Field:
        """Retrieve Field entry."""
        ...

    def __delitem__(self, name: str) -> None:
        """Delete entry from collection."""
        ...

    def __iter__(self) -> Iterator[Field]:
        """Allow iteration over entries."""
        ...

    def __len__(self) -> int:
        """Get total number of Field entries."""
        ...

    def __contains__(self, key: str) -> bool:
        """Whether a field with a case-insensitively equal name is present."""
        ...


class HTTPResponse(Protocol):
    """The parts of a urllib3 response the classifier reads."""

    @property
    def status(self) -> int:
        """The 3 digit response status code (1xx, 2xx, 3xx, 4xx, 5xx)."""
        ...

    @property
    def headers(self) -> HTTPHeaderDict:
        """Every response header line, excluding the status line."""
        ...

    def read(self, amt: int | None = None) -> bytes:
        """Read up to ``amt`` bytes of the body, or all of it."""
        ...

    def close(self) -> None:
        """Close the response, discarding any unread body bytes."""
        ...


class HTTPConnection(Protocol):
    """A single, unpooled HTTP connection.

    :py:class:`urllib3.connection.HTTPSConnection` satisfies this protocol.
    """

    def connect(self) -> None:
        """Establish the connection."""
        ...

    def request(
        self,
        method: str,
        url: str,
        body: Iterable[bytes] | None = None,
        headers: Mapping[str, str] | None = None,
        *,
        preload_content: bool = True,
    ) -> None:
        """Send the request line, the headers and then every chunk of ``body``."""
        ...

    def getresponse(self) -> HTTPResponse:
        """Read the status line and headers of the response."""
        ...

    def close(self) -> None:
        """Close the connection."""
        ...
