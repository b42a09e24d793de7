import os
from dataclasses import dataclass, field
from typing import Tuple

from dotenv import load_dotenv

load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))

DEFAULT_RPC_URL = "https://aura-mainnet.metaplex.com"
DEFAULT_PORT = 5000
DEFAULT_HOST = "0.0.0.0"


def _env(name: str, default: str) -> str:
    return (os.getenv(name) or "").strip() or default


def _parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise ValueError(f"PORT must be an integer, got {raw!r}")
    if not 0 < port < 65536:
        raise ValueError(f"PORT out of range: {port}")
    return port


def _parse_origins(raw: str) -> Tuple[str, ...]:
    origins = tuple(o.strip() for o in raw.split(",") if o.strip())
    return origins or ("*",)


@dataclass(frozen=True)
class Config:
    """Gateway configuration, resolved once at startup."""

    rpc_url: str = DEFAULT_RPC_URL
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    cors_origins: Tuple[str, ...] = field(default_factory=lambda: ("*",))
    log_level: str = "INFO"

    @property
    def listen_address(self) -> str:
        return f"http://{self.host}:{self.port}"


def load_config() -> Config:
    """
    Build the Config from process environment (and the project .env).

    Environment:
        SOLANA_RPC_URL: DAS JSON-RPC endpoint
        PORT: listen port
        HOST: listen interface
        CORS_ORIGINS: comma separated allowed origins
        LOG_LEVEL: logging level name

    Raises:
        ValueError: If PORT is not a valid port number
    """
    return Config(
        rpc_url=_env("SOLANA_RPC_URL", DEFAULT_RPC_URL),
        host=_env("HOST", DEFAULT_HOST),
        port=_parse_port(_env("PORT", str(DEFAULT_PORT))),
        cors_origins=_parse_origins(_env("CORS_ORIGINS", "*")),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
    )
