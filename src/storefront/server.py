"""HTTP server runner for the Catzo storefront.

Configures logging, initializes the storefront domain and serves the API with
uvicorn. Adapters are picked from the environment (STORE_ADAPTER,
EMAIL_ADAPTER, ...); with nothing set the shop runs in demo mode on the
in-memory store.

Usage:
    python -m storefront.server                 # 0.0.0.0:8000
    python -m storefront.server --port 9000 --reload
"""

import argparse

import uvicorn

from storefront.app import create_app
from storefront.domain import storefront
from storefront.utils.logging import configure_logging


def build_app():
    """Application factory for ``uvicorn --factory``."""
    configure_logging()
    storefront.init()
    return create_app()


def main():
    parser = argparse.ArgumentParser(description="Catzo storefront API server")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    uvicorn.run("storefront.server:build_app", factory=True, host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
