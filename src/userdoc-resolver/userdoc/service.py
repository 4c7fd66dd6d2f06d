import asyncio
import logging
import re
from typing import Callable, Optional, Sequence, Union

from .calldata import resolve_from_call_data, resolve_from_strings
from .config import Config
from .matcher import match_function
from .metadata import MetadataDocument, MetadataParseError, parse_metadata
from .metadata_client import MetadataClient
from .models import (
    MetadataFound,
    NoMatchingDocFound,
    ResolutionResult,
    TransportError,
)
from .notice import resolve_notice
from .payment_request import PaymentRequest
from .signatures import SELECTOR_LENGTH, HexMethodSignature, TextMethodSignature
from .transaction import Transaction

ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")

logger = logging.getLogger(__name__)

Address = Union[str, bytes]


class UserDocService:
    """Resolve the user documentation notice of a contract function call."""

    def __init__(self, config: Optional[Config] = None, client: Optional[MetadataClient] = None) -> None:
        self.config = config or Config()
        self.client = client or MetadataClient(
            base_urls=self.config.metadata_repo_urls,
            timeout=self.config.request_timeout,
        )

    def resolve_text_signature(
        self,
        signature: Union[str, TextMethodSignature],
        address: Address,
        chain_id: int,
        values: Sequence[str],
    ) -> ResolutionResult:
        if isinstance(signature, str):
            signature = TextMethodSignature(signature)
        try:
            normalized = signature.normalized_signature
        except ValueError as exc:
            return TransportError(f"Invalid signature '{signature}': {exc}")

        document = self._load_document(address, chain_id)
        if not isinstance(document, MetadataDocument):
            return document

        function = match_function(document.functions, signature)
        if function is None:
            return NoMatchingDocFound()

        arguments = resolve_from_strings(function.inputs, values)
        return resolve_notice(document, function, normalized, arguments)

    def resolve_hex_signature(
        self,
        signature: Optional[Union[str, HexMethodSignature]],
        address: Address,
        chain_id: int,
        data: bytes,
    ) -> ResolutionResult:
        if isinstance(signature, str):
            try:
                signature = HexMethodSignature(signature)
            except ValueError as exc:
                return TransportError(str(exc))

        document = self._load_document(address, chain_id)
        if not isinstance(document, MetadataDocument):
            return document

        # no selector means nothing in the ABI can match
        function = match_function(document.functions, signature) if signature else None
        if function is None:
            return NoMatchingDocFound()

        arguments = resolve_from_call_data(function.inputs, data, SELECTOR_LENGTH)
        return resolve_notice(document, function, function.text_signature, arguments)

    def resolve_transaction(self, tx: Transaction) -> ResolutionResult:
        if not tx.to or tx.chain_id is None:
            return TransportError("Transaction must have a destination address and chain id to resolve the userdoc")

        signature = None
        if len(tx.input) >= SELECTOR_LENGTH:
            signature = HexMethodSignature.from_call_data(tx.input)
        return self.resolve_hex_signature(signature, tx.to, tx.chain_id, tx.input)

    def resolve_payment_request(
        self, request: PaymentRequest, chain_id: Optional[int] = None
    ) -> ResolutionResult:
        if not request.address:
            return TransportError("ERC-681 must have an address to resolve the userdoc")
        if not request.function:
            return TransportError("ERC-681 must name a function to resolve the userdoc")

        chain = chain_id if chain_id is not None else request.chain_id
        if chain is None:
            chain = self.config.chain_id
        return self.resolve_text_signature(
            request.text_signature(), request.address, chain, request.param_values
        )

    async def resolve_text_signature_async(self, *args, **kwargs) -> ResolutionResult:
        return await self._run_async(self.resolve_text_signature, *args, **kwargs)

    async def resolve_hex_signature_async(self, *args, **kwargs) -> ResolutionResult:
        return await self._run_async(self.resolve_hex_signature, *args, **kwargs)

    async def resolve_transaction_async(self, tx: Transaction) -> ResolutionResult:
        return await self._run_async(self.resolve_transaction, tx)

    async def resolve_payment_request_async(
        self, request: PaymentRequest, chain_id: Optional[int] = None
    ) -> ResolutionResult:
        return await self._run_async(self.resolve_payment_request, request, chain_id)

    async def _run_async(self, fn: Callable[..., ResolutionResult], *args, **kwargs) -> ResolutionResult:
        return await asyncio.to_thread(fn, *args, **kwargs)

    def _load_document(self, address: Address, chain_id: int) -> Union[MetadataDocument, ResolutionResult]:
        try:
            address = self._normalize_address(address)
        except ValueError as exc:
            return TransportError(str(exc))

        outcome = self.client.fetch(chain_id, address)
        if not isinstance(outcome, MetadataFound):
            logger.debug("Metadata lookup for %s on chain %s: %s", address, chain_id, outcome)
            return outcome

        try:
            return parse_metadata(outcome.body)
        except MetadataParseError as exc:
            return TransportError(f"Failed to parse metadata: {exc}")

    def _normalize_address(self, address: Address) -> Address:
        if isinstance(address, (bytes, bytearray)):
            if len(address) != 20:
                raise ValueError("Invalid address. Expected 20 bytes.")
            return bytes(address)
        if not isinstance(address, str):
            raise ValueError("Address must be a string.")

        candidate = address.strip()
        if not candidate.startswith("0x"):
            candidate = f"0x{candidate}"
        if not ADDRESS_PATTERN.match(candidate):
            raise ValueError("Invalid address format. Expected 0x-prefixed 40 hex characters.")
        return candidate
