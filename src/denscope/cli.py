"""
Command-line interface for querying the DenScope API.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Iterable, Sequence, Tuple

import requests

from .api import create_client
from .core.client import DenScopeClient
from .core.config import load_client_config
from .core.errors import ConfigError, DenScopeError


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def _add_agent_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("chain_id", type=int, help="Chain id of the agent registry")
    parser.add_argument("agent_id", type=int, help="Agent id within the registry")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="denscope",
        description="Query the DenScope agent reputation API",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing DENSCOPE_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    agent = commands.add_parser("agent", help="Show an agent profile")
    _add_agent_arguments(agent)

    score = commands.add_parser("score", help="Show an agent's trust score")
    _add_agent_arguments(score)

    signals = commands.add_parser("signals", help="List an agent's signals")
    _add_agent_arguments(signals)
    signals.add_argument("--status", choices=("open", "resolved", "all"))

    events = commands.add_parser("events", help="List an agent's on-chain events")
    _add_agent_arguments(events)
    events.add_argument("--limit", type=int)
    events.add_argument("--offset", type=int)
    events.add_argument("--kind")

    search = commands.add_parser("search", help="Search agents")
    search.add_argument("--q", help="Free-text query or owner address")
    search.add_argument("--chain-id", type=int)
    search.add_argument("--limit", type=int)
    return parser


def _run_command(client: DenScopeClient, args: argparse.Namespace) -> Any:
    if args.command == "agent":
        return client.get_agent(args.chain_id, args.agent_id)
    if args.command == "score":
        return client.get_score(args.chain_id, args.agent_id)
    if args.command == "signals":
        return client.get_signals(args.chain_id, args.agent_id, status=args.status)
    if args.command == "events":
        return client.get_events(
            args.chain_id,
            args.agent_id,
            limit=args.limit,
            offset=args.offset,
            kind=args.kind,
        )
    return client.search(q=args.q, chain_id=args.chain_id, limit=args.limit)


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        config = load_client_config(env_file=args.env_file, overrides=overrides)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    with create_client(config=config) as client:
        try:
            result = _run_command(client, args)
        except DenScopeError as exc:
            logging.error("%s (body: %s)", exc, exc.body)
            return 1
        except requests.RequestException as exc:
            logging.error("Request failed: %s", exc)
            return 1

    print(json.dumps(result.raw, indent=2, sort_keys=True))
    return 0


def main() -> None:
    sys.exit(run_cli())
