"""staffstore-lite CLI entry point.

Usage: uv run staffstore-lite [command]
"""
import argparse
import sys

from staffstore_lite.config import DEFAULT_LIMIT, LOG_LEVELS, ServerConfig, configure_logging


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {raw!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return value


def _add_serve_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "serve",
        help="Serve the employee API over HTTP.",
    )
    p.add_argument(
        "--host", default="127.0.0.1",
        help="Bind address (default: 127.0.0.1)",
    )
    p.add_argument(
        "--port", type=int, default=8080,
        help="Bind port, 0 lets the OS pick (default: 8080)",
    )
    p.add_argument(
        "--default-limit", type=int, default=DEFAULT_LIMIT,
        help=f"Page size when a list request has no limit (default: {DEFAULT_LIMIT})",
    )


def _add_stress_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "stress",
        help="Hammer an in-memory repository from many threads and check invariants.",
    )
    p.add_argument(
        "--threads", type=_positive_int, default=8,
        help="Worker threads (default: 8)",
    )
    p.add_argument(
        "--operations", type=_positive_int, default=10_000,
        help="Total operations across all threads (default: 10000)",
    )
    p.add_argument(
        "--seed", type=int, default=42,
        help="RNG seed for reproducible runs (default: 42)",
    )


def _run_serve(args: argparse.Namespace) -> None:
    from staffstore_lite.api.server import EmployeeServer

    config = ServerConfig(
        host=args.host,
        port=args.port,
        default_limit=args.default_limit,
        log_level=args.log_level,
    )
    server = EmployeeServer(config)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.stop()


def _run_stress(args: argparse.Namespace) -> int:
    from staffstore_lite.profiling.stress import format_stress_report, run_stress

    result = run_stress(threads=args.threads, operations=args.operations, seed=args.seed)
    print(format_stress_report(result))
    return 0 if result.ok else 1


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="staffstore-lite",
        description="Employee records in a thread-safe, insertion-ordered in-memory store.",
    )
    parser.add_argument(
        "--log-level", default="INFO", type=str.upper, choices=LOG_LEVELS,
        help="Logging level (default: INFO)",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_serve_parser(subparsers)
    _add_stress_parser(subparsers)

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    configure_logging(args.log_level)

    if args.command == "serve":
        _run_serve(args)
    elif args.command == "stress":
        sys.exit(_run_stress(args))
