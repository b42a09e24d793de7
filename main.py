import logging
from typing import Optional

from flask import Flask, jsonify, request

from api.v1.das_routes import router as das_routes
from config.config import Config, load_config
from core.router import DASRouter
from infra.http_client import RPCClient

logger = logging.getLogger(__name__)

CORS_ALLOW_METHODS = "GET, POST, OPTIONS"
CORS_ALLOW_HEADERS = "Content-Type"


def configure_logging(config: Config) -> None:
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def create_app(config: Optional[Config] = None, rpc_client: Optional[RPCClient] = None) -> Flask:
    """
    Build the gateway app.

    Args:
        config: Gateway configuration (read from the environment if None)
        rpc_client: Dispatcher to use (one pointed at config.rpc_url if None)
    """
    config = config or load_config()
    configure_logging(config)

    app = Flask(__name__)
    app.config["GATEWAY"] = config
    app.extensions["das_router"] = DASRouter(rpc_client or RPCClient(config.rpc_url))
    app.register_blueprint(das_routes)

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        if "*" in config.cors_origins:
            response.headers["Access-Control-Allow-Origin"] = "*"
        elif origin in config.cors_origins:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers.add("Vary", "Origin")
        response.headers["Access-Control-Allow-Methods"] = CORS_ALLOW_METHODS
        response.headers["Access-Control-Allow-Headers"] = CORS_ALLOW_HEADERS
        return response

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    logger.info("[Gateway] Forwarding DAS requests to %s", config.rpc_url)
    return app


app = create_app()

if __name__ == "__main__":
    gateway_config = app.config["GATEWAY"]
    logger.info("[Gateway] Server running at %s", gateway_config.listen_address)
    app.run(host=gateway_config.host, port=gateway_config.port)
