"""Main entry point for the Explorer API server."""

import argparse
import sys
from typing import Optional

import uvicorn

from explorer_api.config import get_app_config
from explorer_api.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def run_server(port: Optional[int] = None, host: Optional[str] = None) -> None:
    """Run the server.

    Args:
        port: Optional port override
        host: Optional host override
    """
    config = get_app_config()
    server = config.server
    configure_logging(server.log_level, server.json_logs)

    if port is not None:
        if not 0 < port < 65536:
            logger.error(f"Invalid port number: {port}")
            sys.exit(1)
        server.port = port
    if host:
        server.host = host

    logger.info(
        f"Starting Explorer API on {server.bind_address} (Environment: {server.environment})"
    )
    logger.info(f"Using Solana RPC URL: {config.solana.rpc_url.split('?')[0]}")

    uvicorn.run(
        "explorer_api.app:create_application",
        factory=True,
        host=server.host,
        port=server.port,
        reload=server.debug,
        log_level=server.log_level.lower(),
    )


def main(argv=None) -> None:
    """Parse command line options and run the server."""
    parser = argparse.ArgumentParser(description="Explorer API server")
    parser.add_argument("--port", type=int, help="Server port")
    parser.add_argument("--host", help="Bind address")
    args = parser.parse_args(argv)

    run_server(port=args.port, host=args.host)


if __name__ == "__main__":
    main()
