import re
from dataclasses import dataclass
from typing import List, Tuple

from eth_utils import keccak

HEX_SIGNATURE_PATTERN = re.compile(r"^[0-9a-f]{8}$")
SELECTOR_LENGTH = 4

TYPE_ALIASES = {
    "uint": "uint256",
    "int": "int256",
    "fixed": "fixed128x18",
    "ufixed": "ufixed128x18",
    "byte": "bytes1",
}


def split_types(params: str) -> List[str]:
    """Split a parameter list at top-level commas, keeping tuple parentheses intact."""
    types: List[str] = []
    if not params.strip():
        return types

    depth = 0
    buf = ""
    for ch in params:
        if ch == "," and depth == 0:
            types.append(buf.strip())
            buf = ""
            continue
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        buf += ch
    types.append(buf.strip())

    for t in types:
        if not t:
            raise ValueError("Empty type in function signature.")
    return types


def split_array_suffix(typ: str) -> Tuple[str, str]:
    base = typ.strip()
    suffix = ""
    while base.endswith("]"):
        lidx = base.rfind("[")
        if lidx < 0:
            raise ValueError(f"Unbalanced array brackets in type '{typ}'.")
        suffix = base[lidx:] + suffix
        base = base[:lidx].rstrip()
    return base, suffix


def _strip_parameter_name(param: str) -> str:
    """Keep only the type token of ``type [location] [name]``."""
    text = param.strip()
    if not text:
        raise ValueError("Empty parameter type.")
    if not text.startswith("("):
        return text.split()[0]

    depth = 0
    for idx, ch in enumerate(text):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                match = re.match(r"(\s*\[\s*\d*\s*\])*", text[idx + 1 :])
                suffix = re.sub(r"\s+", "", match.group(0)) if match else ""
                return text[: idx + 1] + suffix
    raise ValueError(f"Unbalanced parentheses in parameter '{param}'.")


def normalize_type(typ: str) -> str:
    """Canonical spelling of an ABI type: aliases expanded, no whitespace."""
    base, suffix = split_array_suffix(_strip_parameter_name(typ))
    suffix = re.sub(r"\s+", "", suffix)
    if base.startswith("("):
        if not base.endswith(")"):
            raise ValueError(f"Malformed tuple type '{typ}'.")
        inner = ",".join(normalize_type(t) for t in split_types(base[1:-1]))
        return f"({inner}){suffix}"
    return TYPE_ALIASES.get(base, base) + suffix


def selector_for(signature: str) -> bytes:
    return keccak(text=signature)[:SELECTOR_LENGTH]


@dataclass(frozen=True)
class TextMethodSignature:
    """A textual function signature such as ``transfer(address,uint256)``."""

    signature: str

    @property
    def function_name(self) -> str:
        return self.signature.split("(", 1)[0].strip()

    @property
    def parameters(self) -> List[str]:
        text = self.signature.strip()
        if "(" not in text or not text.endswith(")"):
            raise ValueError("Signature must be in the form name(type1,type2,...)")
        params = text.split("(", 1)[1][:-1]
        return [normalize_type(p) for p in split_types(params)]

    @property
    def normalized_signature(self) -> str:
        return f"{self.function_name}({','.join(self.parameters)})"

    def to_hex_signature(self) -> "HexMethodSignature":
        return HexMethodSignature(selector_for(self.normalized_signature).hex())

    def __str__(self) -> str:
        return self.signature


@dataclass(frozen=True)
class HexMethodSignature:
    """A 4-byte function selector, stored as 8 lowercase hex chars."""

    hex: str

    def __post_init__(self) -> None:
        value = self.hex.strip().lower()
        if value.startswith("0x"):
            value = value[2:]
        if not HEX_SIGNATURE_PATTERN.match(value):
            raise ValueError("Hex signature must be exactly 4 bytes (8 hex characters).")
        object.__setattr__(self, "hex", value)

    @classmethod
    def from_bytes(cls, selector: bytes) -> "HexMethodSignature":
        return cls(bytes(selector).hex())

    @classmethod
    def from_call_data(cls, data: bytes) -> "HexMethodSignature":
        if len(data) < SELECTOR_LENGTH:
            raise ValueError("Call data is shorter than a function selector.")
        return cls.from_bytes(data[:SELECTOR_LENGTH])

    def to_bytes(self) -> bytes:
        return bytes.fromhex(self.hex)

    def __str__(self) -> str:
        return f"0x{self.hex}"
