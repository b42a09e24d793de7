"""
Shared fixtures: a gateway app wired to a mocked dispatcher, so route tests
can assert on the outbound params without touching the network.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from config.config import Config
from infra.http_client import RPCClient
from main import create_app


@pytest.fixture
def rpc_client():
    client = MagicMock(spec=RPCClient)
    client.send_request = AsyncMock(return_value={"ok": True})
    return client


@pytest.fixture
def app(rpc_client):
    app = create_app(Config(rpc_url="http://das.test"), rpc_client=rpc_client)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
