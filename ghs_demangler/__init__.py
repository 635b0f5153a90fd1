"""
Python package which implements a demangler for Green Hills C++ symbols.
"""

from ghs_demangler.decompress import decompress
from ghs_demangler.demangler import GHSDemangler, demangle, parse
from ghs_demangler.exceptions import (
    DecompressionError,
    DemangleError,
    NamesIndexError,
    ParseError,
)
from ghs_demangler.names import (
    BaseType,
    FunctionPointer,
    Identifier,
    InName,
    Modifier,
    Name,
    Namespace,
    SizedArray,
    Template,
    ValueArgument,
    WithArguments,
    WithReturnValue,
)
from ghs_demangler.render import render
from ghs_demangler.splitter import split
from ghs_demangler.token import ModifierKind, Position

__all__ = [
    "parse",
    "demangle",
    "decompress",
    "split",
    "render",
    "GHSDemangler",
    "DemangleError",
    "ParseError",
    "DecompressionError",
    "NamesIndexError",
    "Name",
    "Identifier",
    "BaseType",
    "Modifier",
    "ModifierKind",
    "Position",
    "WithArguments",
    "Template",
    "Namespace",
    "InName",
    "WithReturnValue",
    "FunctionPointer",
    "ValueArgument",
    "SizedArray",
]
