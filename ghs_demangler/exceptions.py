"""
Exception types raised by the demangler.

Every error derives from `DemangleError`, which is a `ValueError` so callers
that only care about "could not demangle" can catch either.
"""

__all__ = ["DemangleError", "ParseError", "DecompressionError", "NamesIndexError"]


class DemangleError(ValueError):
    """Base class for all demangling failures."""


class ParseError(DemangleError):
    """
    A grammar alternative does not match at the current position.

    This is the only error absorbed by ordered alternation; when every
    alternative fails it surfaces to the caller.
    """


class DecompressionError(DemangleError):
    """The `__CPR` compression wrapper could not be expanded."""


class NamesIndexError(DemangleError):
    """
    A names-list back-reference or repeat points outside the list built so far.

    Well-formed symbols never produce this. It is never treated as a mismatch by
    alternation.
    """

    def __init__(self, index: int, size: int):
        super().__init__(f"Names list reference {index} out of range for list of {size} entries")
        self.index = index
        self.size = size
