# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import base64
import hashlib
import hmac
import re
from datetime import UTC, datetime
from email.utils import format_datetime

from ._http import Fields
from .exceptions import SigningConfigurationError
from .interfaces.identity import S3CredentialsIdentity

SIGNING_ALGORITHM = "sha1"
DEFAULT_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Sub-resources that stay part of the signed resource, in order of precedence.
SIGNED_SUB_RESOURCES: tuple[str, ...] = ("acl", "torrent")
_SUB_RESOURCE_PATTERNS = {
    name: re.compile(rf"[&?]{name}(?:$|=|&)") for name in SIGNED_SUB_RESOURCES
}


def verify_signing_support() -> None:
    """Make sure HMAC-SHA1 is usable in this runtime.

    Call this during application startup. A FIPS-restricted OpenSSL build, for
    instance, may refuse SHA-1, and no request can be signed without it.

    :raises SigningConfigurationError: If HMAC-SHA1 can't be computed.
    """
    try:
        hmac.new(key=b"key", msg=b"msg", digestmod=SIGNING_ALGORITHM).digest()
    except ValueError as e:
        raise SigningConfigurationError(
            f"Could not initialize the HMAC-{SIGNING_ALGORITHM.upper()} algorithm."
        ) from e


def http_date(value: datetime | None = None) -> str:
    """Format a timestamp the way the ``Date`` header expects it.

    The result looks like ``Tue, 27 Mar 2007 19:36:42 GMT`` and uses English day
    and month names whatever the process locale is.

    :param value: An aware datetime. Defaults to the current time.
    """
    if value is None:
        value = datetime.now(UTC)
    if value.tzinfo is None:
        raise ValueError("Cannot format a naive datetime as an HTTP date.")
    return format_datetime(value.astimezone(UTC), usegmt=True)


def content_md5(data: bytes) -> str:
    """Base64 encoded MD5 digest of ``data``, suitable for ``Content-MD5``."""
    return base64.b64encode(hashlib.md5(data).digest()).decode("ascii")


def canonical_resource(resource: str) -> str:
    """Strip the query from ``resource``, keeping a signed sub-resource if present.

    ``/bucket/key?acl&foo=bar`` becomes ``/bucket/key?acl`` while
    ``/bucket/key?foo=bar`` becomes ``/bucket/key``.
    """
    path, _, _ = resource.partition("?")
    for name, pattern in _SUB_RESOURCE_PATTERNS.items():
        if pattern.search(resource):
            return f"{path}?{name}"
    return path


def canonical_string(
    *,
    method: str,
    content_md5: str | None,
    content_type: str | None,
    date: str,
    fields: Fields,
    resource: str,
) -> str:
    """Build the string to sign for AWS Signature Version 2.

    The string is defined to be::

        <HTTPMethod>\\n
        <Content-MD5>\\n
        <Content-Type>\\n
        <Date>\\n
        <CanonicalizedAmzHeaders>
        <CanonicalizedResource>

    where each canonicalized header is ``lower-cased-name:value\\n`` and the headers
    are sorted by lower-cased name.

    :param method: The HTTP method, for example ``GET``.
    :param content_md5: Value of the ``Content-MD5`` header, if any.
    :param content_type: Value of the ``Content-Type`` header as it will be sent.
    :param date: Value of the ``Date`` header as it will be sent.
    :param fields: The ``x-amz-*`` headers that are part of the signature.
    :param resource: The request path, with its query string if there is one.
    """
    canonical_fields = "".join(
        f"{name}:{value}\n" for name, value in fields.canonical_items()
    )
    return (
        f"{method}\n"
        f"{content_md5 or ''}\n"
        f"{content_type or ''}\n"
        f"{date}\n"
        f"{canonical_fields}"
        f"{canonical_resource(resource)}"
    )


class SigV2Signer:
    """Request signer for applying the AWS Signature Version 2 algorithm."""

    def sign(
        self,
        *,
        identity: S3CredentialsIdentity,
        method: str,
        content_md5: str | None,
        content_type: str | None,
        date: str,
        fields: Fields,
        resource: str,
    ) -> str:
        """Generate the ``Authorization`` header value for a request.

        :param identity: The credentials to sign with.
        :param method: The HTTP method, for example ``GET``.
        :param content_md5: Value of the ``Content-MD5`` header, if any.
        :param content_type: Value of the ``Content-Type`` header as it will be sent.
        :param date: Value of the ``Date`` header as it will be sent.
        :param fields: The ``x-amz-*`` headers that are part of the signature.
        :param resource: The request path, with its query string if there is one.
        """
        self._validate_identity(identity=identity)
        string_to_sign = canonical_string(
            method=method,
            content_md5=content_md5,
            content_type=content_type,
            date=date,
            fields=fields,
            resource=resource,
        )
        signature = self.signature(
            secret_key=identity.secret_access_key, string_to_sign=string_to_sign
        )
        return self.authorization(
            access_key_id=identity.access_key_id, signature=signature
        )

    def signature(self, *, secret_key: str, string_to_sign: str) -> str:
        """Base64 encoded HMAC-SHA1 of ``string_to_sign``.

        The raw UTF-8 bytes of ``secret_key`` are the HMAC key.
        """
        digest = hmac.new(
            key=secret_key.encode("utf-8"),
            msg=string_to_sign.encode("utf-8"),
            digestmod=SIGNING_ALGORITHM,
        ).digest()
        return base64.b64encode(digest).decode("ascii")

    def authorization(self, *, access_key_id: str, signature: str) -> str:
        return f"AWS {access_key_id}:{signature}"

    def _validate_identity(self, *, identity: S3CredentialsIdentity) -> None:
        if not isinstance(identity, S3CredentialsIdentity):  # pyright: ignore
            raise ValueError(
                "Received unexpected value for identity parameter. Expected "
                f"S3CredentialsIdentity but received {type(identity)}."
            )
