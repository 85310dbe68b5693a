"""Command line entry point for cape_build.

Usage:
    cape-build accounts                       # print the configured accounts
    cape-build --network hardhat accounts     # accounts derived from TEST_MNEMONIC
    cape-build compile                        # compile contracts/ into artifacts/
    cape-build networks                       # list network profiles
    cape-build node --upstream http://127.0.0.1:8546
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from tabulate import tabulate

from cape_build.config.logging_config import level_from_name, setup_logger
from cape_build.config.network import HDAccounts
from cape_build.config.settings import Settings, load_project_config
from cape_build.exceptions import CapeBuildError
from cape_build.node.server import start_node
from cape_build.runtime.environment import create_runtime
from cape_build.runtime.tasks import TASK_ACCOUNTS, TASK_COMPILE

logger = logging.getLogger(__name__)


def cmd_accounts(runtime, args):
    """Print the accounts of the selected network."""
    runtime.run(TASK_ACCOUNTS)


def cmd_compile(runtime, args):
    """Compile the project and print contract sizes."""
    sources = [Path(p) for p in args.sources] if args.sources else None
    report = runtime.run(TASK_COMPILE, sources=sources)

    if not report.contracts:
        print("Nothing to compile")
        return

    rows = []
    for size in report.contracts:
        rows.append([
            size.name,
            f"{size.deployed_size / 1024:.3f}",
            f"{size.initcode_size / 1024:.3f}",
            "OVER 24KB" if size.over_limit else "OK",
        ])
    print(tabulate(rows, headers=["Contract", "Deployed (KiB)", "Initcode (KiB)", "Status"]))

    if report.oversized and args.strict_size:
        sys.exit(1)


def cmd_networks(runtime, args):
    """List the configured network profiles."""
    rows = []
    for name, profile in runtime.config.networks.items():
        if isinstance(profile.accounts, HDAccounts):
            accounts = "mnemonic" if profile.accounts.mnemonic else "mnemonic (unset)"
        else:
            accounts = profile.accounts
        marker = "*" if name == runtime.config.default_network else ""
        rows.append([
            f"{name}{marker}",
            profile.url or "(in-process)",
            profile.gas_price or "auto",
            accounts,
            profile.timeout or "",
        ])
    print(tabulate(rows, headers=["Network", "URL", "Gas price", "Accounts", "Timeout (ms)"]))


def cmd_node(runtime, args):
    """Run the local JSON-RPC server until interrupted."""
    handle = start_node(runtime, args.upstream, host=args.host, port=args.port)
    print(f"Started JSON-RPC server at {handle.url}/")
    try:
        handle.http_server.serve_forever()
    except KeyboardInterrupt:
        print("\nShutting down")
    finally:
        handle.http_server.server_close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cape-build",
        description="Build, test and deploy tooling for the CAPE contracts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--network", default=None, help="Network profile to use (default: localhost)")
    parser.add_argument("--env-file", default=None, help="Load environment variables from this file")
    parser.add_argument("--log-level", default=None, help="Logging level (default: CAPE_LOG_LEVEL or INFO)")
    parser.add_argument("--log-dir", default=None, help="Also write rotating log files here")

    subparsers = parser.add_subparsers(dest="command", required=True)

    accounts = subparsers.add_parser("accounts", help="Prints the list of accounts")
    accounts.set_defaults(func=cmd_accounts)

    compile_ = subparsers.add_parser("compile", help="Compiles the entire project")
    compile_.add_argument("sources", nargs="*", help="Specific .sol files (default: everything under contracts/)")
    compile_.add_argument(
        "--strict-size",
        action="store_true",
        help="Exit with an error if a contract exceeds the EIP-170 size limit",
    )
    compile_.set_defaults(func=cmd_compile)

    networks = subparsers.add_parser("networks", help="Lists the configured networks")
    networks.set_defaults(func=cmd_networks)

    node = subparsers.add_parser("node", help="Starts a local JSON-RPC server")
    node.add_argument("--upstream", required=True, help="JSON-RPC endpoint to forward requests to")
    node.add_argument("--host", default="127.0.0.1", help="Interface to bind (default: 127.0.0.1)")
    node.add_argument("--port", type=int, default=None, help="Port to bind (default: RPC_PORT or 8545)")
    node.set_defaults(func=cmd_node)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Without --env-file, look for .env from the directory the command runs in
    load_dotenv(args.env_file or find_dotenv(usecwd=True))

    try:
        settings = Settings.from_env()
        setup_logger(
            "cape_build",
            level=level_from_name(args.log_level or settings.log_level),
            log_dir=Path(args.log_dir) if args.log_dir else None,
        )
        runtime = create_runtime(network=args.network, config=load_project_config(settings))
        args.func(runtime, args)
    except CapeBuildError as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
