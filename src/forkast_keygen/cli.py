"""Command line entry point: ``forkast-keygen create | list | revoke``."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
from typing import Optional, Sequence

from dotenv import load_dotenv

from .attestation import LocalAccountSigner
from .client import ForkastKeyClient
from .config import KeygenConfig
from .constants import DEFAULT_ENDPOINTS
from .errors import InputValidationError, KeygenError
from .models import AuthContext
from .session import KeySession


def _require(value: Optional[str], name: str) -> str:
    if not value or not value.strip():
        raise InputValidationError(f"{name} must be set (flag or environment variable)")
    return value.strip()


def build_config(args: argparse.Namespace) -> KeygenConfig:
    config = KeygenConfig.from_env()
    if args.endpoint:
        config.endpoints = list(args.endpoint)
    elif args.use_default_endpoints:
        config.endpoints = config.endpoints + DEFAULT_ENDPOINTS
    if args.timeout is not None:
        config.timeout = args.timeout
    if args.debug_errors:
        config.debug_errors = True
    return config


def _auth_from_args(args: argparse.Namespace) -> AuthContext:
    return AuthContext(
        address=_require(args.address, "FORKAST_ADDRESS"),
        api_key=_require(args.api_key, "FORKAST_API_KEY"),
        api_secret=_require(args.api_secret, "FORKAST_API_SECRET"),
        passphrase=_require(args.passphrase, "FORKAST_PASSPHRASE"),
    )


async def run_create(client: ForkastKeyClient, args: argparse.Namespace) -> None:
    signer = LocalAccountSigner(_require(args.private_key, "PRIVATE_KEY"))
    session = KeySession(client, signer.address)
    chain_id = args.chain_id if args.chain_id is not None else client.config.chain_id
    bundle = await session.generate(signer, chain_id=chain_id, nonce=args.nonce)
    print(json.dumps(bundle.to_dict(), indent=2))


async def run_list(client: ForkastKeyClient, args: argparse.Namespace) -> None:
    keys = await client.list_keys(_auth_from_args(args))
    if not keys:
        print("No keys found for this wallet.")
        return
    for key in keys:
        print(key)


async def run_revoke(client: ForkastKeyClient, args: argparse.Namespace) -> None:
    await client.revoke(_auth_from_args(args), args.key)
    print(f"Revoked {args.key}")


def _add_auth_args(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument("--address", default=os.getenv("FORKAST_ADDRESS"))
    subparser.add_argument("--api-key", default=os.getenv("FORKAST_API_KEY"))
    subparser.add_argument("--api-secret", default=os.getenv("FORKAST_API_SECRET"))
    subparser.add_argument("--passphrase", default=os.getenv("FORKAST_PASSPHRASE"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="forkast-keygen",
        description="Generate, list and revoke Forkast API credentials.",
    )
    parser.add_argument(
        "--endpoint",
        action="append",
        help="Backend base URL; repeat for mirrors (default: CLOB_URL, RELAYER_URL).",
    )
    parser.add_argument(
        "--use-default-endpoints",
        action="store_true",
        help="Append the public Forkast hosts to the configured endpoints.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-request timeout in seconds (default: FORKAST_TIMEOUT or 5).",
    )
    parser.add_argument(
        "--debug-errors",
        action="store_true",
        help="Append raw backend messages to sanitized errors.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    subparsers = parser.add_subparsers(dest="command", required=True)

    create_parser = subparsers.add_parser(
        "create",
        help="Sign the ClobAuth attestation with PRIVATE_KEY and mint a key.",
    )
    create_parser.add_argument("--private-key", default=os.getenv("PRIVATE_KEY"))
    create_parser.add_argument(
        "--nonce",
        default="0",
        help="Digits only; a different nonce derives a different key (default: %(default)s).",
    )
    create_parser.add_argument("--chain-id", type=int, default=None)
    create_parser.set_defaults(handler=run_create)

    list_parser = subparsers.add_parser("list", help="List active keys for the wallet.")
    _add_auth_args(list_parser)
    list_parser.set_defaults(handler=run_list)

    revoke_parser = subparsers.add_parser("revoke", help="Revoke one API key.")
    _add_auth_args(revoke_parser)
    revoke_parser.add_argument("--key", required=True, help="API key to revoke.")
    revoke_parser.set_defaults(handler=run_revoke)

    return parser


async def _dispatch(args: argparse.Namespace) -> None:
    async with ForkastKeyClient(build_config(args)) as client:
        await args.handler(client, args)


def main(argv: Optional[Sequence[str]] = None) -> None:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        asyncio.run(_dispatch(args))
    except KeygenError as err:
        raise SystemExit(f"error: {err}") from err


if __name__ == "__main__":
    main()
