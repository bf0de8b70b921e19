"""Local launcher for the match control API."""

import argparse

import uvicorn

from infra.logger import configure_logging, get_logger
from infra.settings import load_settings


def main():
    parser = argparse.ArgumentParser(description="Run the tank field match API.")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port for the API (default: 8000)")
    parser.add_argument(
        "--reload",
        dest="reload",
        action="store_true",
        default=False,
        help="Enable auto-reload for development",
    )
    parser.add_argument("--log-file", default=None, help="Also write logs to this file (under storage/logs)")
    args = parser.parse_args()

    settings = load_settings()
    configure_logging(level=settings.log_level, json=settings.log_json, log_file=args.log_file)
    log = get_logger(__name__)

    url = f"http://{args.host}:{args.port}"
    log.info("Starting tank field API at %s", url)
    uvicorn.run(
        "api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
