#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass
from functools import cache

import certifi

from .user_agent import UserAgentBuilder


@dataclass(kw_only=True)
class TransportConfig:
    """Connection-level configuration for a single S3 call.

    :param timeout: How long, in seconds, to wait on connect and on each socket read
        or write before giving up. ``None`` leaves urllib3's default in place.
    :param port: An explicit port. Defaults to 443.
    :param ca_certs: Path to the CA bundle used to verify the server. Defaults to the
        ``certifi`` bundle.
    :param user_agent: Overrides the ``User-Agent`` header.
    """

    timeout: float | None = None
    port: int | None = None
    ca_certs: str | None = None
    user_agent: str | None = None

    def resolve_ca_certs(self) -> str:
        return self.ca_certs or certifi.where()

    def resolve_user_agent(self) -> str:
        return self.user_agent or default_user_agent()


@cache
def default_user_agent() -> str:
    """The ``User-Agent`` sent when none is configured.

    It is computed once and stays fixed for the life of the process.
    """
    from . import __version__

    return str(UserAgentBuilder.from_environment(__version__).build())
