"""
Route-level tests: Flask test client against create_app() with the
dispatcher mocked, so every outbound call is recorded.
"""

import logging

import pytest

from config.config import Config
from core.exceptions import TransportError, UpstreamRpcError
from main import create_app

OWNER = "86xCnPeV69n6t3DnyGvkKobf9FdN2H9oiVDdaMpo2MMY"

# path, body missing its required field(s)
MISSING_REQUIRED = [
    ("/api/asset", {}),
    ("/api/asset/proof", {"assetIds": ["abc"]}),
    ("/api/assets/batch", {}),
    ("/api/assets/proof/batch", {}),
    ("/api/assets/owner", {"limit": 10}),
    ("/api/assets/authority", {"ownerAddress": OWNER}),
    ("/api/assets/group", {"groupKey": "collection"}),
    ("/api/assets/creator", {"onlyVerified": True}),
    ("/api/asset/signatures", {"limit": 10}),
    ("/api/token/accounts", {"limit": 10}),
]

# path, valid body, remote method, generic failure message
VALID_REQUESTS = [
    ("/api/asset", {"id": "abc"}, "getAsset", "Failed to fetch asset details"),
    ("/api/asset/proof", {"id": "abc"}, "getAssetProof", "Failed to fetch asset proof"),
    ("/api/assets/batch", {"assetIds": ["a", "b"]}, "getAssetBatch",
     "Failed to fetch assets batch"),
    ("/api/assets/proof/batch", {"assetIds": ["a"]}, "getAssetProofBatch",
     "Failed to fetch asset proofs batch"),
    ("/api/assets/owner", {"ownerAddress": OWNER}, "getAssetsByOwner",
     "Failed to fetch assets by owner"),
    ("/api/assets/authority", {"authorityAddress": OWNER}, "getAssetsByAuthority",
     "Failed to fetch assets by authority"),
    ("/api/assets/group", {"groupKey": "collection", "groupValue": OWNER}, "getAssetsByGroup",
     "Failed to fetch assets by group"),
    ("/api/assets/creator", {"creatorAddress": OWNER}, "getAssetsByCreator",
     "Failed to fetch assets by creator"),
    ("/api/asset/signatures", {"id": "abc"}, "getSignaturesForAsset",
     "Failed to fetch signatures for asset"),
    ("/api/token/accounts", {"owner": OWNER}, "getTokenAccounts",
     "Failed to fetch token accounts"),
    ("/api/assets/search", {}, "searchAssets", "Failed to search assets"),
]


def _outbound(rpc_client):
    """(method, params) of the single outbound call."""
    assert rpc_client.send_request.await_count == 1
    return rpc_client.send_request.await_args.args


@pytest.mark.parametrize("path, body", MISSING_REQUIRED)
def test_missing_required_field_is_400_without_remote_call(client, rpc_client, path, body):
    r = client.post(path, json=body)

    assert r.status_code == 400
    assert "error" in r.get_json()
    rpc_client.send_request.assert_not_awaited()


@pytest.mark.parametrize("path", ["/api/assets/batch", "/api/assets/proof/batch"])
def test_batch_with_non_array_asset_ids_is_400(client, rpc_client, path):
    r = client.post(path, json={"assetIds": "abc"})

    assert r.status_code == 400
    assert r.get_json() == {"error": "assetIds must be an array"}
    rpc_client.send_request.assert_not_awaited()


@pytest.mark.parametrize("path, body, method, _message", VALID_REQUESTS)
def test_valid_request_reaches_remote_method(client, rpc_client, path, body, method, _message):
    r = client.post(path, json=body)

    assert r.status_code == 200
    assert r.get_json() == {"ok": True}
    assert _outbound(rpc_client)[0] == method


@pytest.mark.parametrize("path, body, method, message", VALID_REQUESTS)
def test_upstream_error_is_generic_500(client, rpc_client, caplog, path, body, method, message):
    rpc_client.send_request.side_effect = UpstreamRpcError("boom", error={"message": "boom"})

    with caplog.at_level(logging.ERROR):
        r = client.post(path, json=body)

    assert r.status_code == 500
    assert r.get_json() == {"error": message}
    assert "boom" not in r.get_data(as_text=True)
    assert any("boom" in record.getMessage() for record in caplog.records)


def test_transport_error_is_generic_500(client, rpc_client, caplog):
    rpc_client.send_request.side_effect = TransportError("Failed to reach http://das.test")

    with caplog.at_level(logging.ERROR):
        r = client.post("/api/asset", json={"id": "abc"})

    assert r.status_code == 500
    assert r.get_json() == {"error": "Failed to fetch asset details"}
    assert any("transport failure" in record.getMessage() for record in caplog.records)


def test_asset_result_passes_through(client, rpc_client):
    rpc_client.send_request.return_value = {"id": "abc"}

    r = client.post("/api/asset", json={"id": "abc"})

    assert r.status_code == 200
    assert r.get_json() == {"id": "abc"}
    assert _outbound(rpc_client) == ("getAsset", {"id": "abc"})


def test_batch_result_list_passes_through(client, rpc_client):
    rpc_client.send_request.return_value = [{"id": "a"}, None]

    r = client.post("/api/assets/batch", json={"assetIds": ["a", "b"]})

    assert r.get_json() == [{"id": "a"}, None]
    assert _outbound(rpc_client) == ("getAssetBatch", {"ids": ["a", "b"]})


@pytest.mark.parametrize("limit, expected", [(5000, 1000), (50, 50)])
def test_signatures_limit_capped(client, rpc_client, limit, expected):
    r = client.post("/api/asset/signatures", json={"id": "abc", "limit": limit})

    assert r.status_code == 200
    assert _outbound(rpc_client) == ("getSignaturesForAsset", {"id": "abc", "limit": expected})


def test_token_accounts_owner_only(client, rpc_client):
    r = client.post("/api/token/accounts", json={"owner": OWNER})

    assert r.status_code == 200
    method, params = _outbound(rpc_client)
    assert params == {"owner": OWNER}
    assert "mint" not in params


def test_search_with_empty_body_forwards_empty_record(client, rpc_client):
    r = client.post("/api/assets/search", json={})

    assert r.status_code == 200
    assert _outbound(rpc_client) == ("searchAssets", {})


def test_search_without_json_body_still_dispatches(client, rpc_client):
    r = client.post("/api/assets/search")

    assert r.status_code == 200
    assert _outbound(rpc_client) == ("searchAssets", {})


def test_false_booleans_are_forwarded(client, rpc_client):
    client.post("/api/assets/creator", json={"creatorAddress": OWNER, "onlyVerified": False})
    assert _outbound(rpc_client)[1] == {"creatorAddress": OWNER, "onlyVerified": False}

    rpc_client.send_request.reset_mock()
    client.post("/api/assets/search", json={"frozen": False, "compressed": False})
    assert _outbound(rpc_client)[1] == {"frozen": False, "compressed": False}


def test_invalid_limit_is_400(client, rpc_client):
    r = client.post("/api/assets/owner", json={"ownerAddress": OWNER, "limit": "lots"})

    assert r.status_code == 400
    assert "limit" in r.get_json()["error"]
    rpc_client.send_request.assert_not_awaited()


def test_only_post_is_routed(client):
    r = client.get("/api/asset")
    assert r.status_code == 405


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.get_json() == {"status": "ok"}


def test_cors_headers(client):
    r = client.options("/api/asset", headers={"Origin": "https://app.example"})

    assert r.status_code == 200
    assert r.headers["Access-Control-Allow-Origin"] == "*"
    assert "POST" in r.headers["Access-Control-Allow-Methods"]


@pytest.fixture
def allow_list_client(rpc_client):
    app = create_app(
        Config(rpc_url="http://das.test", cors_origins=("https://app.example",)),
        rpc_client=rpc_client,
    )
    return app.test_client()


def test_cors_allow_list_echoes_listed_origin(allow_list_client):
    r = allow_list_client.post(
        "/api/asset", json={"id": "abc"}, headers={"Origin": "https://app.example"}
    )

    assert r.status_code == 200
    assert r.headers["Access-Control-Allow-Origin"] == "https://app.example"
    assert "Origin" in r.headers.get_all("Vary")


def test_cors_allow_list_ignores_unlisted_origin(allow_list_client):
    r = allow_list_client.post(
        "/api/asset", json={"id": "abc"}, headers={"Origin": "https://evil.example"}
    )

    assert r.status_code == 200
    assert "Access-Control-Allow-Origin" not in r.headers
