from __future__ import annotations

import argparse
import logging
import sys
import typing as tp

import anyio
import httpx

from revalidate._async._harness import AsyncScenarioRunner
from revalidate._config import HarnessOptions, ServerOptions
from revalidate._exceptions import ConfigurationError
from revalidate._httpx import ServerTransport
from revalidate._server import ValidationServer
from revalidate._suite import CaseResult, arun_suite, default_suite, run_suite
from revalidate._sync._harness import ScenarioRunner

logger = logging.getLogger("revalidate.cli")

LOG_FORMAT = "%(asctime)s %(message)s"
LOG_DATE_FORMAT = "[%Y/%m/%d %H:%M:%S]"


def parse_address(address: str) -> tp.Tuple[str, int]:
    """
    Split a ``host:port`` listen address.

    Examples:
        >>> parse_address("localhost:4000")
        ('localhost', 4000)
        >>> parse_address(":4000")
        ('0.0.0.0', 4000)
    """
    host, sep, port = address.rpartition(":")
    if not sep or not port.isdigit():
        raise ConfigurationError(f"Expected an address like 'localhost:4000', got {address!r}")
    return host or "0.0.0.0", int(port)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="revalidate",
        description="Conditional-request validation server and test harness.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log every request and response")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="serve validation documents over HTTP")
    serve.add_argument("address", help='address to listen on (e.g. "localhost:4000")')
    serve.add_argument("--granularity", type=int, default=None, help="document version window in seconds")

    check = subparsers.add_parser("check", help="run the validation suite against a target")
    check.add_argument("--target", default=None, help="base URL of the server under test")
    check.add_argument("--granularity", type=int, default=None, help="the target's version window in seconds")
    check.add_argument("--in-process", action="store_true", help="test a built-in server without opening sockets")
    check.add_argument("--sync", action="store_true", help="use the thread-based runner")
    check.add_argument("-k", dest="selected", action="append", default=[], help="only run cases with this name")

    return parser


def serve(args: argparse.Namespace) -> int:
    try:
        import uvicorn
    except ImportError as e:
        raise ImportError(
            "uvicorn is required to serve over HTTP. "
            "Please install revalidate with the 'server' extra, "
            "e.g., 'pip install revalidate[server]'."
        ) from e

    from revalidate.asgi import ValidationApp

    host, port = parse_address(args.address)
    options = ServerOptions.from_env()
    if args.granularity is not None:
        options = ServerOptions(granularity=args.granularity, static_version=options.static_version)

    logger.info("Listening and serving on %s", args.address)
    uvicorn.run(ValidationApp(ValidationServer(options)), host=host, port=port, log_level="warning")
    return 0


def _harness_options(args: argparse.Namespace) -> HarnessOptions:
    options = HarnessOptions.from_env()
    return HarnessOptions(
        target=args.target if args.target is not None else options.target,
        granularity=args.granularity if args.granularity is not None else options.granularity,
        tick=options.tick,
        timeout=options.timeout,
    )


def check(args: argparse.Namespace) -> int:
    options = _harness_options(args)
    cases = default_suite()
    if args.selected:
        cases = [case for case in cases if case.name in args.selected]

    transport = ServerTransport(ValidationServer(ServerOptions(granularity=options.granularity)))

    results: tp.List[CaseResult]
    if args.sync:
        client = httpx.Client(timeout=options.timeout, transport=transport if args.in_process else None)
        with client, ScenarioRunner(options, client=client) as runner:
            results = run_suite(cases, runner)
    else:

        async def main() -> tp.List[CaseResult]:
            client = httpx.AsyncClient(timeout=options.timeout, transport=transport if args.in_process else None)
            async with client, AsyncScenarioRunner(options, client=client) as runner:
                return await arun_suite(cases, runner)

        results = anyio.run(main)

    for result in results:
        status = "ok" if result.passed else f"FAILED: {result.failure}"
        print(f"{result.name:<24} {status}")

    failed = sum(1 for result in results if not result.passed)
    print(f"{len(results) - failed} passed, {failed} failed")
    return 1 if failed else 0


def main(argv: tp.Optional[tp.Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )

    try:
        if args.command == "serve":
            return serve(args)
        return check(args)
    except ConfigurationError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2
