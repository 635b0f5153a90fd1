"""
Expansion of the `__CPR` back-reference compression applied to long symbols.

A compressed symbol looks like `__CPR<length>__<data>`, where `<data>` is split on
`J`. Tokens at even positions are literal text. Tokens at odd positions are
directives: an empty one stands for a literal `J`; otherwise it is an offset
into the output so far, where a length-prefixed name starts that should be
copied again.
"""

from io import StringIO
from logging import getLogger

from ghs_demangler.exceptions import DecompressionError, ParseError
from ghs_demangler.io_util import expect, read_length_prefixed, read_number

_logger = getLogger(__name__)

THUNK_MARKER = "__ghs_thunk__"
# Length of the whole `__ghs_thunk__0x????????__` prefix, not just the marker.
THUNK_PREFIX_LENGTH = 25

COMPRESSION_MARKER = "__CPR"
COMPRESSION_DELIMITER = "__"
SEPARATOR = "J"


def strip_thunk(symbol: str) -> str:
    """
    Remove a thunk prefix from `symbol`, if present.

    Raises `DecompressionError` if nothing follows the prefix.
    """
    if not symbol.startswith(THUNK_MARKER):
        return symbol
    if len(symbol) <= THUNK_PREFIX_LENGTH:
        raise DecompressionError(f"Truncated thunk prefix in {symbol!r}")
    return symbol[THUNK_PREFIX_LENGTH:]


def decompress(symbol: str) -> str:
    """
    Strip any thunk prefix and expand a `__CPR` compressed symbol.
    Symbols without the compression marker are returned as-is.

    Raises `DecompressionError` if the compressed data is malformed.
    """
    symbol = strip_thunk(symbol)
    if not symbol.startswith(COMPRESSION_MARKER):
        return symbol

    src = StringIO(symbol[len(COMPRESSION_MARKER) :])
    try:
        # The expected length is informational only.
        expected_length = read_number(src, allow_zero=True)
        expect(src, COMPRESSION_DELIMITER)
    except ParseError as e:
        raise DecompressionError(f"Malformed compression header in {symbol!r}") from e

    output = ""
    for i, token in enumerate(src.read().split(SEPARATOR)):
        if i % 2 == 0:
            output += token
        elif not token:
            output += SEPARATOR
        else:
            output += _copy_back_reference(output, token)

    if len(output) != expected_length:
        _logger.debug(
            "Decompressed %r to %d chars, header said %d", symbol, len(output), expected_length
        )
    return output


def _copy_back_reference(output: str, directive: str) -> str:
    """
    Resolve a back-reference directive against the output built so far. The
    referenced name is re-emitted with its own length prefix.
    """
    if not directive.isascii() or not directive.isdecimal():
        raise DecompressionError(f"Invalid back-reference offset {directive!r}")

    offset = int(directive)
    if offset > len(output):
        raise DecompressionError(
            f"Back-reference offset {offset} is past the end of {len(output)} decompressed chars"
        )

    try:
        name = read_length_prefixed(StringIO(output[offset:]))
    except ParseError as e:
        raise DecompressionError(
            f"No length-prefixed name at back-reference offset {offset} of {output!r}"
        ) from e

    # Lengths count characters, as `read_length_prefixed` does.
    return f"{len(name)}{name}"
