"""
Minimal script that pays for a trust score query with x402.
"""

from __future__ import annotations

import argparse
import logging
import sys

from denscope import ConfigError, DenScopeError, create_client


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch a trust score using the SDK API")
    parser.add_argument("chain_id", type=int)
    parser.add_argument("agent_id", type=int)
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing DENSCOPE_* settings",
    )
    parser.add_argument(
        "--private-key",
        help="Pay with this key instead of DENSCOPE_PRIVATE_KEY",
    )
    parser.add_argument(
        "--base-url",
        help="Override the API base URL (default: https://denscope.vercel.app)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        client = create_client(
            env_file=args.env_file,
            private_key=args.private_key,
            base_url=args.base_url,
        )
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    with client:
        try:
            result = client.get_score(args.chain_id, args.agent_id)
        except DenScopeError as exc:
            logging.error("Score request failed: %s (%s)", exc, exc.body)
            return 1

    logging.info(
        "Agent %s on chain %s scores %s (%s confidence)",
        args.agent_id,
        args.chain_id,
        result.score.value,
        result.score.confidence,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
