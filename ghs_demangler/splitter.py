"""
Heuristic that locates the end of the leading name of a symbol.

Unlike every nested name, the outermost name of a mangled symbol carries no
length prefix. The grammar needs one, so it is inferred here from the first
marker that can follow such a name and prepended to the symbol.
"""

from logging import getLogger
from typing import Optional

_logger = getLogger(__name__)

DUNDER = "__"
ARGUMENTS_MARKER = "__F"
TEMPLATE_MARKER = "__tm__"
MAX_NAMESPACE_DEPTH = 8


def _namespace_marker(depth: int) -> str:
    return f"Q{depth}_"


def find_split(symbol: str) -> int:
    """
    Return the length of the leading name of `symbol`.
    """
    if symbol.startswith(DUNDER):
        rest = symbol[len(DUNDER) :]
        if all(c.isascii() and c.isalnum() for c in rest):
            _logger.debug("%s: reserved name, no structure", symbol)
            return len(symbol)
        if DUNDER not in rest:
            _logger.debug("%s: reserved name without further markers", symbol)
            return len(symbol)

    split = _earliest_marker(symbol)
    if split is None:
        _logger.debug("%s: no markers, whole symbol is the name", symbol)
        return len(symbol)

    _logger.debug("%s: name ends at %d", symbol, split)
    return split


def _earliest_marker(symbol: str) -> Optional[int]:
    candidates = []

    for marker in (ARGUMENTS_MARKER, TEMPLATE_MARKER):
        index = symbol.find(marker)
        if index != -1:
            candidates.append(index)

    for depth in range(1, MAX_NAMESPACE_DEPTH + 1):
        index = symbol.find(_namespace_marker(depth))
        # A namespace is introduced by `__`, which belongs after the name.
        if index >= len(DUNDER):
            candidates.append(index - len(DUNDER))

    return min(candidates, default=None)


def split(symbol: str) -> str:
    """
    Prefix `symbol` with the length of its leading name.
    """
    return f"{find_split(symbol)}{symbol}"
