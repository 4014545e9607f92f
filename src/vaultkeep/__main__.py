# VaultKeep - Main Entry Point
#
# Starts the HTTP server. Host/port default to VAULTKEEP_HOST/VAULTKEEP_PORT.

import sys
import argparse

from . import __version__
from .core import configure_logging, get_settings, get_logger


def main():
    """Main entry point for VaultKeep."""
    parser = argparse.ArgumentParser(
        description="VaultKeep - personal credential vault web service",
    )

    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind to (default: VAULTKEEP_HOST or 127.0.0.1)"
    )

    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: VAULTKEEP_PORT or 5000)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"VaultKeep v{__version__}"
    )

    args = parser.parse_args()

    settings = get_settings()
    configure_logging(level=settings.log_level, json_output=settings.log_json)
    log = get_logger("vaultkeep")
    log.info("starting", version=__version__, env=settings.env)

    from .api.main import start_api_server

    try:
        start_api_server(host=args.host, port=args.port)
    except KeyboardInterrupt:
        log.info("stopped", reason="user interrupt")
    except OSError as e:
        # e.g. address already in use / permission denied on the port
        log.error("bind_failed", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
