"""
Parsed form of a Solidity ``metadata.json`` document.

Only the parts needed to resolve user documentation are modelled: the ABI
function list under ``output.abi`` and the notice mapping under
``output.userdoc.methods``.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .signatures import normalize_type

logger = logging.getLogger(__name__)


class MetadataParseError(ValueError):
    """Raised when a metadata body cannot be turned into a MetadataDocument."""


@dataclass(frozen=True)
class ABIParameter:
    name: str
    type: str
    components: List["ABIParameter"] = field(default_factory=list)

    @property
    def canonical_type(self) -> str:
        """Type as it appears in a canonical signature; tuples are expanded."""
        if self.type.startswith("tuple"):
            inner = ",".join(c.canonical_type for c in self.components)
            return normalize_type(f"({inner}){self.type[len('tuple'):]}")
        return normalize_type(self.type)


@dataclass(frozen=True)
class ABIFunction:
    name: str
    inputs: List[ABIParameter] = field(default_factory=list)

    @property
    def text_signature(self) -> str:
        return f"{self.name}({','.join(p.canonical_type for p in self.inputs)})"


@dataclass(frozen=True)
class MetadataDocument:
    functions: List[ABIFunction]
    notices: Mapping[str, str]
    compiler_version: Optional[str] = None
    language: Optional[str] = None

    def notice_for(self, signature: str) -> Optional[str]:
        return self.notices.get(signature)


def _parse_parameter(raw: Any) -> ABIParameter:
    if not isinstance(raw, dict):
        raise MetadataParseError("ABI parameter must be an object.")
    typ = raw.get("type")
    if not isinstance(typ, str) or not typ:
        raise MetadataParseError("ABI parameter is missing its type.")
    components = [_parse_parameter(c) for c in raw.get("components") or []]
    param = ABIParameter(name=raw.get("name") or "", type=typ, components=components)
    try:
        _ = param.canonical_type
    except ValueError as exc:
        raise MetadataParseError(f"Malformed ABI type '{typ}': {exc}") from exc
    return param


def _parse_functions(abi: Any) -> List[ABIFunction]:
    if abi is None:
        return []
    if not isinstance(abi, list):
        raise MetadataParseError("output.abi must be a list.")

    functions: List[ABIFunction] = []
    for entry in abi:
        if not isinstance(entry, dict):
            continue
        # entries without a type are functions in the ABI JSON format
        if entry.get("type", "function") != "function":
            continue
        name = entry.get("name")
        if not isinstance(name, str) or not name:
            continue
        try:
            inputs = [_parse_parameter(p) for p in entry.get("inputs") or []]
        except MetadataParseError as exc:
            # malformed entries are dropped, the rest of the ABI stays usable
            logger.warning("Skipping ABI function '%s': %s", name, exc)
            continue
        functions.append(ABIFunction(name=name, inputs=inputs))
    return functions


def _parse_notices(userdoc: Any) -> Dict[str, str]:
    if not isinstance(userdoc, dict):
        return {}
    methods = userdoc.get("methods")
    if not isinstance(methods, dict):
        return {}

    notices: Dict[str, str] = {}
    for signature, doc in methods.items():
        if not isinstance(doc, dict):
            continue
        notice = doc.get("notice")
        if isinstance(notice, str) and notice:
            notices[signature] = notice
    return notices


def parse_metadata(text: str) -> MetadataDocument:
    try:
        raw = json.loads(text)
    except ValueError as exc:
        raise MetadataParseError(f"Metadata is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise MetadataParseError("Metadata must be a JSON object.")

    output = raw.get("output") or {}
    if not isinstance(output, dict):
        raise MetadataParseError("Metadata output must be an object.")

    compiler = raw.get("compiler")
    compiler_version = compiler.get("version") if isinstance(compiler, dict) else None

    return MetadataDocument(
        functions=_parse_functions(output.get("abi")),
        notices=_parse_notices(output.get("userdoc")),
        compiler_version=compiler_version,
        language=raw.get("language"),
    )
