"""
MCP server exposing NatSpec notice resolution for contract calls.
"""

import argparse
import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from mcp.server.fastmcp import FastMCP

from .config import load_config, resolve_chain_id
from .payment_request import parse_payment_request
from .service import UserDocService
from .signatures import SELECTOR_LENGTH, HexMethodSignature
from .transaction import Transaction, hex_to_bytes

server = FastMCP(
    name="userdoc-mcp",
    instructions="Resolve human-readable notices for contract function calls from published contract metadata.",
)

_service: Optional[UserDocService] = None


def _get_service() -> UserDocService:
    global _service
    if _service is None:
        cfg = load_config()
        _service = UserDocService(cfg)
    return _service


def _chain_id(network: Optional[Union[int, str]]) -> int:
    if network is None or network == "":
        return _get_service().config.chain_id
    return resolve_chain_id(str(network))


def _normalize_array_param(value: Optional[Any], name: str) -> list:
    """
    Ensure a parameter intended as an array is actually treated as one:
    - str/bytes: likely misuse, raise with guidance
    - Mapping: reject (not an array)
    - other scalars: auto-wrap into single-element list
    """
    if value is None:
        return []
    if isinstance(value, (str, bytes, bytearray)):
        raise ValueError(f"{name} must be an array (e.g. ['0x...', '100']); got a string/bytes.")
    if isinstance(value, Mapping):
        raise ValueError(f"{name} must be an array, not an object/map.")
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]


@server.tool(
    name="resolve_text_signature",
    title="Resolve Notice From Text Signature",
    description="Resolve a function notice from a text signature like transfer(address,uint256). `args` must be an array of display values in parameter order.",
)
def resolve_text_signature(
    address: str,
    signature: str,
    args: Optional[Any] = None,
    network: Optional[Union[int, str]] = None,
) -> dict:
    svc = _get_service()
    values = _normalize_array_param(args, "args")
    return svc.resolve_text_signature(signature, address, _chain_id(network), values).to_dict()


@server.tool(
    name="resolve_hex_signature",
    title="Resolve Notice From Call Data",
    description="Resolve a function notice from 0x-prefixed call data; the selector is taken from the first 4 bytes.",
)
def resolve_hex_signature(address: str, data: str, network: Optional[Union[int, str]] = None) -> dict:
    svc = _get_service()
    raw = hex_to_bytes(data, "data")
    selector = HexMethodSignature.from_call_data(raw) if len(raw) >= SELECTOR_LENGTH else None
    return svc.resolve_hex_signature(selector, address, _chain_id(network), raw).to_dict()


@server.tool(
    name="resolve_transaction",
    title="Resolve Notice For Transaction",
    description="Resolve the notice of a transaction given its destination, chain id and input data.",
)
def resolve_transaction(to: str, input: str, chain_id: Union[int, str]) -> dict:
    svc = _get_service()
    tx = Transaction(to=to, chain_id=resolve_chain_id(str(chain_id)), input=hex_to_bytes(input, "input"))
    return svc.resolve_transaction(tx).to_dict()


@server.tool(
    name="resolve_payment_request",
    title="Resolve Notice For ERC-681 URI",
    description="Resolve the notice of an ERC-681 payment request URI (ethereum:<address>[@chain]/<function>?<type>=<value>...).",
)
def resolve_payment_request(uri: str, network: Optional[Union[int, str]] = None) -> dict:
    svc = _get_service()
    request = parse_payment_request(uri)
    chain = resolve_chain_id(str(network)) if network not in (None, "") else None
    return svc.resolve_payment_request(request, chain).to_dict()


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the userdoc MCP server.")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse", "streamable-http"],
        default="stdio",
        help="Transport protocol for MCP.",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host for SSE/HTTP transports.",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port for SSE/HTTP transports.",
    )
    parser.add_argument(
        "--mount-path",
        default="/",
        help="Mount path for SSE transport (only when transport=sse).",
    )
    args = parser.parse_args()

    logging.basicConfig(level=_get_service().config.log_level)

    # FastMCP uses host/port only for SSE/HTTP transports; stdio ignores them.
    server.settings.host = args.host
    server.settings.port = args.port

    if args.transport == "sse":
        server.run(transport="sse", mount_path=args.mount_path)
    else:
        server.run(transport=args.transport)


if __name__ == "__main__":
    main()
