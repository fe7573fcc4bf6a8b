from __future__ import annotations

import argparse
import json

import uvicorn

from proofcount.app.context import build_context
from proofcount.observability.logging import configure_logging
from proofcount.settings import get_settings


def _serve(args: argparse.Namespace) -> None:
    settings = get_settings()
    uvicorn.run(
        "proofcount.app.main:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        log_level=settings.log_level.lower(),
    )


def _create_store(args: argparse.Namespace) -> None:
    context = build_context()
    try:
        result = context.store_registry.create_store(args.store_name)
    finally:
        context.close()
    summary = {"success": result.success, "message": result.message}
    if result.settings is not None:
        summary.update(result.settings.to_document())
    print(json.dumps(summary, indent=2))


def _check_store(args: argparse.Namespace) -> None:
    context = build_context()
    try:
        settings = context.store_registry.check_store(args.store_name)
    finally:
        context.close()
    if settings is None:
        print(json.dumps({"store": False, "error": "Store not found"}, indent=2))
        return
    print(json.dumps({"store": True, **settings.to_document()}, indent=2))


def main() -> None:
    configure_logging()
    parser = argparse.ArgumentParser(description="proofcount view counter service")
    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host")
    serve_parser.add_argument("--port", type=int)

    create_parser = subparsers.add_parser("create-store", help="Register a store with default settings")
    create_parser.add_argument("store_name")

    check_parser = subparsers.add_parser("check-store", help="Show a store's display settings")
    check_parser.add_argument("store_name")

    args = parser.parse_args()
    if args.command == "serve":
        _serve(args)
    elif args.command == "create-store":
        _create_store(args)
    elif args.command == "check-store":
        _check_store(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
