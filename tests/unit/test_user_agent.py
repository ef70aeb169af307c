import pytest
from s3_request.user_agent import (
    UserAgent,
    UserAgentBuilder,
    UserAgentComponent,
    sanitize_user_agent_string_component,
)


@pytest.mark.parametrize(
    "raw_str, allow_hash, expected_str",
    [
        ("foo", False, "foo"),
        ("foo", True, "foo"),
        ("ExampleFramework (1.2.3)", False, "ExampleFramework--1.2.3-"),
        ("foo#1.2.3", False, "foo-1.2.3"),
        ("foo#1.2.3", True, "foo#1.2.3"),
        ("", False, ""),
        ("#", False, "-"),
        ("#", True, "#"),
        ("  ", False, "--"),
        ("@=[]{ }/\\øß©", True, "------------"),
    ],
)
def test_sanitize_ua_string_component(
    raw_str: str, allow_hash: bool, expected_str: str
):
    actual_str = sanitize_user_agent_string_component(raw_str, allow_hash)
    assert actual_str == expected_str


def test_user_agent_component_without_value():
    component = UserAgentComponent(prefix="s3-request", name="0.1.0")
    assert str(component) == "s3-request/0.1.0"


def test_user_agent_component_with_empty_value():
    component = UserAgentComponent(prefix="os", name="linux", value="")
    assert str(component) == "os/linux"


def test_user_agent_component_sanitization():
    component = UserAgentComponent(prefix="md@", name="test!", value="6.1 (x)")
    assert str(component) == "md-/test!#6.1--x-"


def test_user_agent_joins_components_in_order():
    user_agent = UserAgent(
        product=UserAgentComponent(prefix="s3-request", name="0.1.0"),
        language_metadata=[UserAgentComponent("lang", "python", "3.12.1")],
        os_metadata=[UserAgentComponent("os", "linux", "6.1.0")],
    )
    assert str(user_agent) == "s3-request/0.1.0 lang/python#3.12.1 os/linux#6.1.0"


@pytest.mark.parametrize(
    "platform_name, platform_version, python_version, expected",
    [
        ("Linux", "6.1.0", "3.12.1", "s3-request/1.2.3 lang/python#3.12.1 os/linux#6.1.0"),
        ("Darwin", "23.1.0", "3.13.0", "s3-request/1.2.3 lang/python#3.13.0 os/macos#23.1.0"),
        ("Windows", "10", "3.12.0", "s3-request/1.2.3 lang/python#3.12.0 os/windows#10"),
        ("FreeBSD", "14.0", "3.12.0", "s3-request/1.2.3 lang/python#3.12.0 os/other#14.0"),
        (None, None, None, "s3-request/1.2.3 os/other"),
    ],
)
def test_user_agent_builder(
    platform_name: str | None,
    platform_version: str | None,
    python_version: str | None,
    expected: str,
):
    builder = UserAgentBuilder(
        product_version="1.2.3",
        platform_name=platform_name,
        platform_version=platform_version,
        python_version=python_version,
    )
    assert str(builder.build()) == expected


def test_user_agent_builder_from_environment():
    user_agent = str(UserAgentBuilder.from_environment("1.2.3").build())
    assert user_agent.startswith("s3-request/1.2.3 lang/python#")
    assert " os/" in user_agent
