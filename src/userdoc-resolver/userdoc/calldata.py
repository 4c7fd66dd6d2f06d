"""
Turn function arguments into the display strings substituted into notices.

Call-data is decoded head by head with an immutable ``CallDataCursor``: each
parameter consumes its head slot (the value itself for static types, an
offset word for dynamic ones) and hands the advanced cursor to the next
parameter. A parameter that cannot be decoded resolves to ``None`` instead
of failing the whole call.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from eth_abi import decode as abi_decode
from eth_abi import is_encodable_type
from eth_abi.exceptions import DecodingError, ParseError
from eth_abi.grammar import ABIType, BasicType, TupleType
from eth_abi.grammar import parse as parse_abi_type
from eth_utils import to_checksum_address

from .metadata import ABIParameter
from .signatures import SELECTOR_LENGTH

logger = logging.getLogger(__name__)

WORD_SIZE = 32


class InsufficientCallData(ValueError):
    """Raised when the cursor has fewer bytes left than a read requires."""


@dataclass(frozen=True)
class CallDataCursor:
    data: bytes
    offset: int = 0

    @property
    def remaining(self) -> int:
        return max(len(self.data) - self.offset, 0)

    def read(self, size: int) -> Tuple[bytes, "CallDataCursor"]:
        end = self.offset + size
        if end > len(self.data):
            raise InsufficientCallData(
                f"Need {size} bytes at offset {self.offset}, only {self.remaining} available."
            )
        return self.data[self.offset : end], CallDataCursor(self.data, end)

    def exhausted(self) -> "CallDataCursor":
        return CallDataCursor(self.data, len(self.data))


def _head_size(abi_type: ABIType) -> int:
    if abi_type.is_dynamic:
        return WORD_SIZE
    if abi_type.is_array:
        return abi_type.arrlist[-1][0] * _head_size(abi_type.item_type)
    if isinstance(abi_type, TupleType):
        return sum(_head_size(c) for c in abi_type.components)
    return WORD_SIZE


def _parse_type(typ: str) -> Optional[ABIType]:
    try:
        if not is_encodable_type(typ):
            return None
        return parse_abi_type(typ)
    except ParseError:
        return None


def render_value(abi_type: ABIType, value: Any) -> str:
    """Render a decoded value the way it is shown inside a notice."""
    if abi_type.is_array:
        return "[" + ", ".join(render_value(abi_type.item_type, v) for v in value) + "]"
    if isinstance(abi_type, TupleType):
        parts = [render_value(c, v) for c, v in zip(abi_type.components, value)]
        return "(" + ", ".join(parts) + ")"

    base = abi_type.base if isinstance(abi_type, BasicType) else ""
    if base == "bool":
        return "true" if value else "false"
    if base == "address":
        return to_checksum_address(value)
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    return str(value)


def decode_parameter(typ: str, cursor: CallDataCursor) -> Tuple[Optional[str], CallDataCursor]:
    """
    Decode one parameter at the cursor position.

    Returns the display string (or ``None``) and the cursor for the next
    parameter. Unknown types leave the cursor where it was; a truncated head
    exhausts it so every later parameter resolves to ``None`` as well.
    """
    abi_type = _parse_type(typ)
    if abi_type is None:
        logger.warning("Unsupported ABI type '%s'; rendering as null", typ)
        return None, cursor

    try:
        head, next_cursor = cursor.read(_head_size(abi_type))
    except InsufficientCallData as exc:
        logger.warning("Call data too short for '%s': %s", typ, exc)
        return None, cursor.exhausted()

    try:
        if abi_type.is_dynamic:
            pointer = int.from_bytes(head, "big")
            # re-base the tail so it decodes as a standalone single-value payload
            payload = WORD_SIZE.to_bytes(WORD_SIZE, "big") + cursor.data[pointer:]
        else:
            payload = head
        value = abi_decode([typ], payload, strict=False)[0]
    except (DecodingError, ValueError, OverflowError) as exc:
        logger.warning("Failed to decode '%s': %s", typ, exc)
        return None, next_cursor

    return render_value(abi_type, value), next_cursor


def resolve_from_call_data(
    inputs: Sequence[ABIParameter], data: bytes, selector_length: int = SELECTOR_LENGTH
) -> List[Optional[str]]:
    cursor = CallDataCursor(bytes(data[selector_length:]))
    values: List[Optional[str]] = []
    for param in inputs:
        value, cursor = decode_parameter(param.canonical_type, cursor)
        values.append(value)
    return values


def resolve_from_strings(inputs: Sequence[ABIParameter], values: Sequence[str]) -> List[Optional[str]]:
    if len(values) != len(inputs):
        logger.warning("Expected %d argument values, got %d", len(inputs), len(values))
    resolved: List[Optional[str]] = list(values[: len(inputs)])
    resolved.extend([None] * (len(inputs) - len(resolved)))
    return resolved
