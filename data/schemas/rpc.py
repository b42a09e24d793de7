from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, Any, Union


JSONRPC_VERSION = "2.0"
DEFAULT_REQUEST_ID = 1


class RPCRequest(BaseModel):
    jsonrpc: str = JSONRPC_VERSION
    id: Union[int, str] = DEFAULT_REQUEST_ID
    method: str = Field(min_length=1)
    params: Dict[str, Any] = Field(default_factory=dict)


class RPCResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    jsonrpc: Any = None
    id: Any = None
    result: Any = None
    error: Any = None
