import logging
from typing import Optional, Sequence, Union

import requests
from eth_utils import to_checksum_address

from .config import DEFAULT_METADATA_REPO_URLS
from .models import ContractNotFound, FetchOutcome, MetadataFound, TransportError

logger = logging.getLogger(__name__)


class MetadataClient:
    """Thin wrapper around a chain-scoped contract metadata repository."""

    def __init__(
        self,
        base_urls: Optional[Sequence[str]] = None,
        timeout: int = 10,
        session: Optional[requests.Session] = None,
    ) -> None:
        urls = list(base_urls) if base_urls else list(DEFAULT_METADATA_REPO_URLS)
        # Only the first repository is queried; the rest are kept for callers.
        self.base_urls = urls
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def metadata_url(self, chain_id: int, address: Union[str, bytes]) -> str:
        return f"{self.base_urls[0]}{chain_id}/{to_checksum_address(address)}/metadata.json"

    def fetch(self, chain_id: int, address: Union[str, bytes]) -> FetchOutcome:
        url = self.metadata_url(chain_id, address)
        logger.debug("Fetching contract metadata from %s", url)

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Metadata request to %s failed: %s", url, exc)
            return TransportError(f"Error: {exc}")

        if response.status_code == 404:
            return ContractNotFound()
        if response.status_code == 200:
            return MetadataFound(response.text)
        return TransportError(f"Error: {response.status_code} {response.reason}")
