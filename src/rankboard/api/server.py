"""Run the rankings board API under uvicorn."""

from __future__ import annotations

import argparse

import uvicorn

from rankboard.api import create_app
from rankboard.config import load_settings


def main() -> None:
    parser = argparse.ArgumentParser(description="Serve the rankboard REST API")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on")
    args = parser.parse_args()

    settings = load_settings()
    uvicorn.run(create_app(), host=args.host, port=args.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
