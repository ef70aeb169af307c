# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

import certifi
from s3_request import TransportConfig, __version__
from s3_request.config import default_user_agent
from s3_request.transport import open_connection


def test_defaults() -> None:
    config = TransportConfig()
    assert config.timeout is None
    assert config.port is None
    assert config.resolve_ca_certs() == certifi.where()
    assert config.resolve_user_agent() == default_user_agent()


def test_overrides() -> None:
    config = TransportConfig(ca_certs="/etc/ssl/bundle.pem", user_agent="custom/1.0")
    assert config.resolve_ca_certs() == "/etc/ssl/bundle.pem"
    assert config.resolve_user_agent() == "custom/1.0"


def test_default_user_agent_names_product() -> None:
    assert default_user_agent().startswith(f"s3-request/{__version__} ")
    assert default_user_agent() is default_user_agent()


def test_open_connection_is_not_connected_yet() -> None:
    connection = open_connection(
        "s3.amazonaws.com", TransportConfig(timeout=5.0, port=8443)
    )
    try:
        assert connection.host == "s3.amazonaws.com"
        assert connection.port == 8443
        assert connection.timeout == 5.0
        assert connection.ca_certs == certifi.where()
        assert not connection.is_connected
    finally:
        connection.close()
