import os
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_METADATA_REPO_URLS = [
    "https://contractrepo.komputing.org/contract/byChainId/",
]

NETWORK_CHAIN_ID_MAP = {
    "mainnet": 1,
    "ethereum": 1,
    "eth": 1,
    "goerli": 5,
    "sepolia": 11155111,
    "holesky": 17000,
    "gnosis": 100,
    "polygon": 137,
}


@dataclass
class Config:
    metadata_repo_urls: List[str] = field(default_factory=lambda: list(DEFAULT_METADATA_REPO_URLS))
    network: str = "mainnet"
    chain_id: int = 1
    request_timeout: int = 10
    log_level: str = "WARNING"


def resolve_chain_id(network: str, override_chain_id: Optional[str] = None) -> int:
    """Resolve chain ID from override or static network mapping."""
    if override_chain_id:
        return int(override_chain_id)

    normalized = (network or "").strip().lower()
    if normalized.isdigit():
        return int(normalized)

    if normalized in NETWORK_CHAIN_ID_MAP:
        return NETWORK_CHAIN_ID_MAP[normalized]

    allowed = ", ".join(sorted(NETWORK_CHAIN_ID_MAP.keys()) + ["<chain_id>"])
    raise ValueError(f"Unknown network '{network}'. Supported: {allowed}.")


def _split_repo_urls(raw: str) -> List[str]:
    urls = []
    for part in raw.split(","):
        url = part.strip()
        if not url:
            continue
        # chain id is appended directly to the base URL
        if not url.endswith("/"):
            url = f"{url}/"
        urls.append(url)
    return urls


def load_config() -> Config:
    """Load configuration from environment variables."""
    raw_urls = os.getenv("METADATA_REPO_URLS")
    repo_urls = _split_repo_urls(raw_urls) if raw_urls else list(DEFAULT_METADATA_REPO_URLS)
    if not repo_urls:
        raise ValueError("METADATA_REPO_URLS must contain at least one URL.")

    network = os.getenv("NETWORK", "mainnet").strip().lower()
    chain_id_env = os.getenv("CHAIN_ID")
    timeout = int(os.getenv("REQUEST_TIMEOUT", "10"))
    log_level = os.getenv("LOG_LEVEL", "WARNING").strip().upper()

    chain_id = resolve_chain_id(network, chain_id_env.strip() if chain_id_env else None)

    return Config(
        metadata_repo_urls=repo_urls,
        network=network,
        chain_id=chain_id,
        request_timeout=timeout,
        log_level=log_level,
    )
