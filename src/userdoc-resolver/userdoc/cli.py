import argparse
import json
import logging
import sys
from typing import Optional

from .config import load_config, resolve_chain_id
from .models import Resolved
from .payment_request import parse_payment_request
from .service import UserDocService
from .signatures import SELECTOR_LENGTH, HexMethodSignature
from .transaction import Transaction, hex_to_bytes


def _add_target_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--address",
        required=True,
        help="Contract address (0x-prefixed).",
    )
    parser.add_argument(
        "--network",
        required=False,
        help="Network name or numeric chain id. Defaults to NETWORK/CHAIN_ID env or mainnet.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resolve the NatSpec notice of a contract function call from its published metadata.",
        allow_abbrev=False,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    text_parser = subparsers.add_parser("text", help="Resolve from a text signature and argument values")
    _add_target_arguments(text_parser)
    text_parser.add_argument(
        "--signature",
        required=True,
        help="Function signature, e.g. transfer(address,uint256).",
    )
    text_parser.add_argument(
        "--arg",
        dest="args",
        action="append",
        default=[],
        help="Argument display value, repeated in parameter order.",
    )

    hex_parser = subparsers.add_parser("hex", help="Resolve from raw call data")
    _add_target_arguments(hex_parser)
    hex_parser.add_argument(
        "--data",
        required=True,
        help="0x-prefixed call data; the first 4 bytes are the function selector.",
    )

    tx_parser = subparsers.add_parser("tx", help="Resolve from a JSON-RPC transaction object")
    tx_parser.add_argument(
        "--json",
        dest="tx_json",
        required=True,
        help="Transaction JSON (with to, chainId, input), or - to read stdin.",
    )

    uri_parser = subparsers.add_parser("uri", help="Resolve from an ERC-681 payment request URI")
    uri_parser.add_argument(
        "--uri",
        required=True,
        help="Payment request, e.g. ethereum:0x...@1/transfer?address=0x...&uint256=1.",
    )
    uri_parser.add_argument(
        "--network",
        required=False,
        help="Chain override when the URI has no @chain_id.",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config()
        logging.basicConfig(level=config.log_level)
        service = UserDocService(config)
        network = getattr(args, "network", None)
        chain_id = resolve_chain_id(network) if network else config.chain_id

        if args.command == "text":
            result = service.resolve_text_signature(args.signature, args.address, chain_id, args.args)
        elif args.command == "hex":
            data = hex_to_bytes(args.data, "data")
            selector = HexMethodSignature.from_call_data(data) if len(data) >= SELECTOR_LENGTH else None
            result = service.resolve_hex_signature(selector, args.address, chain_id, data)
        elif args.command == "tx":
            raw = sys.stdin.read() if args.tx_json == "-" else args.tx_json
            result = service.resolve_transaction(Transaction.from_rpc(json.loads(raw)))
        else:
            request = parse_payment_request(args.uri)
            result = service.resolve_payment_request(request, resolve_chain_id(network) if network else None)
    except Exception as exc:  # pylint: disable=broad-except
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(result.to_dict(), indent=2))
    if not isinstance(result, Resolved):
        sys.exit(1)


if __name__ == "__main__":
    main()
