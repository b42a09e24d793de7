from typing import Dict, Any, Callable, Optional
import asyncio
import logging
import time

import aiohttp

from core.exceptions import TransportError, UpstreamRpcError
from data.schemas.rpc import RPCRequest, RPCResponse

logger = logging.getLogger(__name__)


class RPCClient:
    """
    Sends DAS JSON-RPC calls to a single configured endpoint.

    Exactly one POST per call: no batching, no retries, no timeout beyond the
    aiohttp defaults. A fresh session is opened for every call, so the client
    holds no state between requests.
    """

    def __init__(
        self,
        endpoint_url: str,
        session_factory: Optional[Callable[..., Any]] = None,
    ):
        """
        Args:
            endpoint_url: DAS JSON-RPC endpoint URL
            session_factory: Callable returning an aiohttp-compatible session
                (defaults to aiohttp.ClientSession)
        """
        self.endpoint_url = endpoint_url
        self.session_factory = session_factory or aiohttp.ClientSession
        self.headers = {"Content-Type": "application/json"}

    def build_payload(self, method: str, params: Dict[str, Any]) -> Dict[str, Any]:
        return RPCRequest(method=method, params=params).model_dump()

    async def send_request(self, method: str, params: Dict[str, Any]) -> Any:
        """
        Call a DAS method and return its result.

        Args:
            method: Remote method name (e.g. "getAsset")
            params: Params record for the method

        Returns:
            The `result` member of the JSON-RPC response, unmodified

        Raises:
            UpstreamRpcError: If the response carries an `error` member
            TransportError: On network errors or a body that is not a JSON object
        """
        payload = self.build_payload(method, params)
        start_time = time.time()

        try:
            async with self.session_factory(headers=self.headers) as session:
                async with session.post(self.endpoint_url, json=payload) as response:
                    data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(
                f"Failed to reach {self.endpoint_url}: {e!r}", method=method
            ) from e
        except ValueError as e:
            raise TransportError(
                f"Non-JSON response from {self.endpoint_url}: {e}", method=method
            ) from e

        latency_ms = (time.time() - start_time) * 1000
        logger.debug("[RPCClient] %s answered in %.2fms", method, latency_ms)

        if not isinstance(data, dict):
            raise TransportError(
                f"Unexpected response from {self.endpoint_url}: expected a JSON object",
                method=method,
            )

        response_data = RPCResponse.model_validate(data)
        if response_data.error is not None:
            error = response_data.error
            message = error.get("message") if isinstance(error, dict) else None
            raise UpstreamRpcError(message or str(error), error=error, method=method)

        return response_data.result
