import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

HEX_PATTERN = re.compile(r"^[0-9a-fA-F]*$")


def hex_to_bytes(value: str, field: str = "value") -> bytes:
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a hex string.")
    v = value[2:] if value.startswith(("0x", "0X")) else value
    if len(v) % 2 != 0:
        v = "0" + v
    if not HEX_PATTERN.match(v):
        raise ValueError(f"{field} must be a hex string.")
    return bytes.fromhex(v)


def _hex_to_int(value: Any, field: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        return None
    try:
        return int(value, 16)
    except ValueError:
        raise ValueError(f"{field} is not a valid hex value.")


@dataclass(frozen=True)
class Transaction:
    """The parts of a transaction needed to resolve its documentation."""

    to: Optional[str]
    chain_id: Optional[int]
    input: bytes = b""

    @classmethod
    def from_rpc(cls, tx: Mapping[str, Any]) -> "Transaction":
        """Build from a JSON-RPC transaction object (hex-encoded fields)."""
        raw_input = tx.get("input") or tx.get("data") or "0x"
        return cls(
            to=tx.get("to"),
            chain_id=_hex_to_int(tx.get("chainId"), "chainId"),
            input=hex_to_bytes(raw_input, "input"),
        )
