"""Run the gateway with uvicorn: python -m marvel_gateway [--host H] [--port P]."""

import argparse
import sys

import uvicorn

from marvel_gateway.config import get_settings
from marvel_gateway.infrastructure.observability import setup_logging
from marvel_gateway.main import create_app


def resolve_bind(ns: argparse.Namespace, host: str, port: int) -> tuple[str, int]:
    """CLI values win over settings whenever given, including --port 0."""
    return (
        ns.host if ns.host is not None else host,
        ns.port if ns.port is not None else port,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="marvel-gateway")
    parser.add_argument("--host", default=None, help="Host to bind (overrides HOST env)")
    parser.add_argument("--port", type=int, default=None, help="Port to bind (overrides PORT env)")
    return parser


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()
    ns = build_parser().parse_args(argv if argv is not None else sys.argv[1:])
    host, port = resolve_bind(ns, settings.host, settings.port)
    settings = settings.model_copy(update={"host": host, "port": port})

    setup_logging(settings.log_level, settings.log_format)
    uvicorn.run(create_app(settings), host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
