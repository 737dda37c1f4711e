"""Entry point for the web server.

Usage:
    python -m storyvid.web [--port PORT] [--host HOST] [--config PATH]
"""

import argparse
import logging
import sys
from pathlib import Path


def main() -> int:
    """Run the web server."""
    parser = argparse.ArgumentParser(
        description="StoryVid Web API",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to run the server on",
    )
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind to",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config.yaml (LLM, TTS, image and render settings)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Logging level",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Import here to avoid loading FastAPI before parsing args
    import uvicorn
    from .backend.dependencies import get_config

    # Update config with CLI args
    config = get_config()
    config.host = args.host
    config.port = args.port
    config.config_path = args.config

    print("Starting StoryVid Web API...")
    print(f"  Host: {args.host}")
    print(f"  Port: {args.port}")
    print(f"  Config: {args.config.absolute() if args.config else 'config.yaml (if present)'}")
    print(f"  URL: http://{args.host}:{args.port}")
    print()

    uvicorn.run(
        "storyvid.web.backend.app:create_app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        factory=True,
        log_level=args.log_level,
    )

    return 0


if __name__ == "__main__":
    sys.exit(main())
