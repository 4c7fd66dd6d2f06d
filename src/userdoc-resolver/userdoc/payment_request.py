"""
ERC-681 payment requests, e.g.
``ethereum:0x89205A3A3b2A69De6Dbf7f01ED13B2108B2c43e7@1/transfer?address=0x8e23...&uint256=1``.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from urllib.parse import parse_qsl, unquote

from .signatures import TextMethodSignature

SCHEME = "ethereum:"

_TARGET_PATTERN = re.compile(
    r"^(?:(?P<prefix>[A-Za-z]+)-)?(?P<address>[^@/?]+)(?:@(?P<chain>\d+))?(?:/(?P<function>[^?]*))?$"
)


@dataclass(frozen=True)
class PaymentRequest:
    address: Optional[str] = None
    chain_id: Optional[int] = None
    function: Optional[str] = None
    function_params: List[Tuple[str, str]] = field(default_factory=list)
    prefix: Optional[str] = None
    value: Optional[str] = None
    gas_limit: Optional[str] = None
    gas_price: Optional[str] = None

    def text_signature(self) -> TextMethodSignature:
        if not self.function:
            raise ValueError("Payment request has no function.")
        types = ",".join(typ for typ, _ in self.function_params)
        return TextMethodSignature(f"{self.function}({types})")

    @property
    def param_values(self) -> List[str]:
        return [value for _, value in self.function_params]


def parse_payment_request(uri: str) -> PaymentRequest:
    text = (uri or "").strip()
    if not text.lower().startswith(SCHEME):
        raise ValueError(f"Payment request must start with '{SCHEME}'.")

    body = text[len(SCHEME) :]
    target, _, query = body.partition("?")
    match = _TARGET_PATTERN.match(target)
    if not match:
        raise ValueError("Malformed payment request target.")

    params: List[Tuple[str, str]] = []
    value = gas_limit = gas_price = None
    for key, raw in parse_qsl(query, keep_blank_values=True):
        if key == "value":
            value = raw
        elif key in ("gas", "gasLimit"):
            gas_limit = raw
        elif key == "gasPrice":
            gas_price = raw
        else:
            params.append((key, raw))

    chain = match.group("chain")
    function = match.group("function")
    return PaymentRequest(
        address=unquote(match.group("address")),
        chain_id=int(chain) if chain else None,
        function=function or None,
        function_params=params,
        prefix=match.group("prefix"),
        value=value,
        gas_limit=gas_limit,
        gas_price=gas_price,
    )
