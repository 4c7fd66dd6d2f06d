import logging
from typing import Iterable, Optional, Union

from .metadata import ABIFunction
from .signatures import HexMethodSignature, TextMethodSignature, selector_for

logger = logging.getLogger(__name__)


def find_by_text_signature(
    functions: Iterable[ABIFunction], signature: TextMethodSignature
) -> Optional[ABIFunction]:
    target = signature.normalized_signature
    for function in functions:
        if function.text_signature == target:
            return function
    return None


def find_by_hex_signature(
    functions: Iterable[ABIFunction], signature: HexMethodSignature
) -> Optional[ABIFunction]:
    """
    Return the first function whose selector equals ``signature``.

    Selector collisions are resolved by ABI declaration order: the first
    declared function wins and later candidates are never considered.
    """
    target = signature.to_bytes()
    for function in functions:
        if selector_for(function.text_signature) == target:
            return function
    return None


def match_function(
    functions: Iterable[ABIFunction],
    signature: Union[TextMethodSignature, HexMethodSignature],
) -> Optional[ABIFunction]:
    if isinstance(signature, TextMethodSignature):
        function = find_by_text_signature(functions, signature)
    else:
        function = find_by_hex_signature(functions, signature)

    if function is None:
        logger.debug("No ABI function matches %s", signature)
    return function
