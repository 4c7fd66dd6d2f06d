"""
Outcome types shared by the fetcher and the resolution pipeline.

Every public resolution call returns exactly one ``ResolutionResult``
variant; nothing is raised across that boundary.
"""

from dataclasses import dataclass
from typing import Any, Dict, Union


@dataclass(frozen=True)
class Resolved:
    """Notice text with every parameter placeholder substituted."""

    notice: str

    def to_dict(self) -> Dict[str, Any]:
        return {"status": "resolved", "notice": self.notice}


@dataclass(frozen=True)
class ContractNotFound:
    """The metadata repository has no entry for the contract (HTTP 404)."""

    def to_dict(self) -> Dict[str, Any]:
        return {"status": "contract_not_found"}


@dataclass(frozen=True)
class NoMatchingDocFound:
    """Metadata was found but no ABI function or notice matched."""

    def to_dict(self) -> Dict[str, Any]:
        return {"status": "no_matching_doc_found"}


@dataclass(frozen=True)
class TransportError:
    """Unexpected HTTP status, network failure, or a failed precondition."""

    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"status": "error", "message": self.message}


@dataclass(frozen=True)
class MetadataFound:
    """Raw metadata body returned by the repository (HTTP 200)."""

    body: str


ResolutionResult = Union[Resolved, ContractNotFound, NoMatchingDocFound, TransportError]
FetchOutcome = Union[MetadataFound, ContractNotFound, TransportError]
