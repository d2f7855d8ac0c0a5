"""
Server version registry.

Maps human-readable protocol version labels to the one-byte codes stored
on the wire. The table is fixed at import time and never mutated.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

from playerlog.core.errors import UnknownVersionCodeError, UnknownVersionError

VERSIONS: Mapping[str, int] = MappingProxyType({
    "1.8": 1,
    "1.9": 2,
    "1.10": 3,
    "1.11": 4,
    "1.12": 5,
    "1.13": 6,
    "1.14": 7,
    "1.15": 8,
    "1.16": 9,
    "1.17": 10,
    "1.18": 11,
    "1.19": 12,
    "1.20": 13,
    "1.21": 14,
})


def _build_reverse(table: Mapping[str, int]) -> Mapping[int, str]:
    reverse = {}
    for label, code in table.items():
        if not 0 <= code <= 0xFF:
            raise RuntimeError(f"Version code out of byte range: {label!r} -> {code}")
        if code in reverse:
            raise RuntimeError(
                f"Duplicate version code {code}: {reverse[code]!r} and {label!r}"
            )
        reverse[code] = label
    return MappingProxyType(reverse)


_LABELS: Mapping[int, str] = _build_reverse(VERSIONS)


def code_for(label: str) -> int:
    """
    Resolve a version label to its wire code.
    
    Args:
        label: Version label (e.g. "1.20")
    
    Returns:
        One-byte version code
    
    Raises:
        UnknownVersionError: If the label is not registered
    """
    try:
        return VERSIONS[label]
    except KeyError:
        raise UnknownVersionError(f"Unknown server version: {label!r}") from None


def label_for(code: int) -> str:
    """
    Resolve a wire code back to its version label.
    
    Raises:
        UnknownVersionCodeError: If the code is not registered
    """
    try:
        return _LABELS[code]
    except KeyError:
        raise UnknownVersionCodeError(f"Unknown server version code: {code}") from None


def labels() -> Tuple[str, ...]:
    """All registered labels, ordered by code."""
    return tuple(_LABELS[code] for code in sorted(_LABELS))
