from typing import Any, Optional


class DASGatewayError(Exception):
    """Base class for every failure raised while serving a DAS request."""


class ValidationError(DASGatewayError):
    """
    The inbound body cannot be turned into a params record.
    Always detected before any remote call is made.
    """

    status_code = 400


class MissingParameter(ValidationError):
    def __init__(self, message: str, fields: Optional[list] = None):
        super().__init__(message)
        self.fields = fields or []


class InvalidShape(ValidationError, ValueError):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class RPCError(DASGatewayError):
    """Raised after dispatch: the remote call did not produce a result."""

    status_code = 500


class UpstreamRpcError(RPCError):
    """The DAS endpoint answered with a JSON-RPC error envelope."""

    def __init__(self, message: str, error: Any = None, method: Optional[str] = None):
        super().__init__(message)
        self.error = error
        self.method = method


class TransportError(RPCError, ConnectionError):
    """The HTTP exchange itself failed (network, timeout, non-JSON body)."""

    def __init__(self, message: str, method: Optional[str] = None):
        super().__init__(message)
        self.method = method
