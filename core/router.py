from typing import Any, Callable, Dict, NamedTuple, Tuple
import logging

from core.exceptions import RPCError, UpstreamRpcError, ValidationError
from infra.http_client import RPCClient
from services import request_parser
from services.response_handler import ResponseHandler

logger = logging.getLogger(__name__)


class Operation(NamedTuple):
    name: str
    path: str
    method: str
    parse: Callable[[Any], Dict[str, Any]]
    failure_message: str


OPERATIONS = (
    Operation("asset", "/asset", "getAsset",
              request_parser.parse_get_asset, "Failed to fetch asset details"),
    Operation("asset_proof", "/asset/proof", "getAssetProof",
              request_parser.parse_get_asset_proof, "Failed to fetch asset proof"),
    Operation("asset_batch", "/assets/batch", "getAssetBatch",
              request_parser.parse_get_asset_batch, "Failed to fetch assets batch"),
    Operation("asset_proof_batch", "/assets/proof/batch", "getAssetProofBatch",
              request_parser.parse_get_asset_proof_batch, "Failed to fetch asset proofs batch"),
    Operation("assets_by_owner", "/assets/owner", "getAssetsByOwner",
              request_parser.parse_get_assets_by_owner, "Failed to fetch assets by owner"),
    Operation("assets_by_authority", "/assets/authority", "getAssetsByAuthority",
              request_parser.parse_get_assets_by_authority, "Failed to fetch assets by authority"),
    Operation("assets_by_group", "/assets/group", "getAssetsByGroup",
              request_parser.parse_get_assets_by_group, "Failed to fetch assets by group"),
    Operation("assets_by_creator", "/assets/creator", "getAssetsByCreator",
              request_parser.parse_get_assets_by_creator, "Failed to fetch assets by creator"),
    Operation("signatures_for_asset", "/asset/signatures", "getSignaturesForAsset",
              request_parser.parse_get_signatures_for_asset, "Failed to fetch signatures for asset"),
    Operation("token_accounts", "/token/accounts", "getTokenAccounts",
              request_parser.parse_get_token_accounts, "Failed to fetch token accounts"),
    Operation("search_assets", "/assets/search", "searchAssets",
              request_parser.parse_search_assets, "Failed to search assets"),
)


class DASRouter:
    """
    Runs one inbound request through normalize -> dispatch -> respond.

    Validation failures answer 400 without contacting the endpoint. Any
    failure after dispatch is logged with its detail and answered with the
    operation's fixed 500 message.
    """

    def __init__(self, rpc_client: RPCClient):
        self.rpc_client = rpc_client
        self.response_handler = ResponseHandler()

    async def handle(self, operation: Operation, body: Any) -> Tuple[Any, int]:
        try:
            params = operation.parse(body)
        except ValidationError as e:
            logger.warning("[DASRouter] Rejected %s request: %s", operation.method, e)
            return self.response_handler.build_error_response(str(e), e.status_code)

        try:
            result = await self.rpc_client.send_request(operation.method, params)
        except UpstreamRpcError as e:
            logger.error(
                "[DASRouter] %s failed upstream: %s (error=%r)", operation.method, e, e.error
            )
            return self.response_handler.build_error_response(
                operation.failure_message, e.status_code
            )
        except RPCError as e:
            logger.error("[DASRouter] %s transport failure: %s", operation.method, e)
            return self.response_handler.build_error_response(
                operation.failure_message, e.status_code
            )

        return self.response_handler.build_response(result)
