import re
from typing import Dict, Optional, Sequence

from .metadata import ABIFunction, MetadataDocument
from .models import NoMatchingDocFound, Resolved, ResolutionResult

NULL_VALUE = "null"


def placeholder(name: str) -> str:
    return f"`{name}`"


def substitute_placeholders(
    template: str, names: Sequence[str], values: Sequence[Optional[str]]
) -> str:
    """
    Replace every backtick-quoted parameter name with its value.

    All placeholders are matched in one scan of the original template, so
    text introduced by one replacement is never matched again. When a name
    repeats, the first declared parameter supplies the value.
    """
    replacements: Dict[str, str] = {}
    for index, name in enumerate(names):
        if not name:
            continue
        value = values[index] if index < len(values) else None
        replacements.setdefault(placeholder(name), NULL_VALUE if value is None else value)

    if not replacements:
        return template

    pattern = re.compile("|".join(re.escape(token) for token in replacements))
    return pattern.sub(lambda m: replacements[m.group(0)], template)


def resolve_notice(
    document: MetadataDocument,
    function: ABIFunction,
    normalized_signature: str,
    values: Sequence[Optional[str]],
) -> ResolutionResult:
    template = document.notice_for(normalized_signature)
    if not template:
        return NoMatchingDocFound()

    names = [param.name for param in function.inputs]
    return Resolved(substitute_placeholders(template, names, values))
