#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import platform
from dataclasses import dataclass, field
from string import ascii_letters, digits
from typing import Self

_USERAGENT_ALLOWED_CHARACTERS = ascii_letters + digits + "!$%&'*+-.^_`|~"
_USERAGENT_ALLOWED_OS_NAMES = (
    "windows",
    "linux",
    "macos",
    "android",
    "ios",
    "watchos",
    "tvos",
    "other",
)
_USERAGENT_PLATFORM_NAME_MAPPINGS = {"darwin": "macos"}
_USERAGENT_PRODUCT_NAME = "s3-request"


@dataclass(frozen=True, slots=True)
class UserAgentComponent:
    """Component of a User-Agent header string in the standard format.

    Each component consists of a prefix, a name, and a value. In the string
    representation these are combined in the format ``prefix/name#value``.
    """

    prefix: str
    name: str
    value: str | None = None

    def __str__(self):
        """Create string like 'prefix/name#value' from a UserAgentComponent."""
        clean_prefix = sanitize_user_agent_string_component(
            self.prefix, allow_hash=True
        )
        clean_name = sanitize_user_agent_string_component(self.name, allow_hash=False)
        if self.value is None or self.value == "":
            return f"{clean_prefix}/{clean_name}"
        clean_value = sanitize_user_agent_string_component(self.value, allow_hash=True)
        return f"{clean_prefix}/{clean_name}#{clean_value}"


@dataclass(kw_only=True, slots=True)
class UserAgent:
    product: UserAgentComponent
    language_metadata: list[UserAgentComponent] = field(default_factory=list)
    os_metadata: list[UserAgentComponent] = field(default_factory=list)

    def __str__(self) -> str:
        components = [self.product, *self.language_metadata, *self.os_metadata]
        return " ".join([str(comp) for comp in components])


class UserAgentBuilder:
    def __init__(
        self,
        *,
        product_version: str,
        platform_name: str | None,
        platform_version: str | None,
        python_version: str | None,
    ) -> None:
        self._product_version = product_version
        self._platform_name = platform_name
        self._platform_version = platform_version
        self._python_version = python_version

    @classmethod
    def from_environment(cls, product_version: str) -> Self:
        return cls(
            product_version=product_version,
            platform_name=platform.system(),
            platform_version=platform.release(),
            python_version=platform.python_version(),
        )

    def build(self) -> UserAgent:
        return UserAgent(
            product=UserAgentComponent(
                prefix=_USERAGENT_PRODUCT_NAME, name=self._product_version
            ),
            language_metadata=self._build_language_metadata(),
            os_metadata=self._build_os_metadata(),
        )

    def _build_language_metadata(self) -> list[UserAgentComponent]:
        if self._python_version is None:
            return []
        return [UserAgentComponent("lang", "python", self._python_version)]

    def _build_os_metadata(self) -> list[UserAgentComponent]:
        """Build the OS-specific platform component.

        Returns a single component prefixed with "os", the normalized platform
        name and, when available, the platform release as value. Unrecognized
        platform names are reported as "other".
        """
        if self._platform_name is None:
            return [UserAgentComponent("os", "other")]

        plt_name_lower = self._platform_name.lower()
        plt_name = _USERAGENT_PLATFORM_NAME_MAPPINGS.get(
            plt_name_lower, plt_name_lower
        )
        if plt_name not in _USERAGENT_ALLOWED_OS_NAMES:
            plt_name = "other"
        return [UserAgentComponent("os", plt_name, self._platform_version)]


def sanitize_user_agent_string_component(raw_str: str, allow_hash: bool = False) -> str:
    """Replaces all not allowed characters in the string with a dash ("-").

    Allowed characters are ASCII alphanumerics and ``!$%&'*+-.^_`|~``. If
    ``allow_hash`` is ``True``, "#"``" is also allowed.

    :type raw_str: str
    :param raw_str: The input string to be sanitized.

    :type allow_hash: bool
    :param allow_hash: Whether "#" is considered an allowed character.
    """
    return "".join(
        c if c in _USERAGENT_ALLOWED_CHARACTERS or (allow_hash and c == "#") else "-"
        for c in raw_str
    )
