"""
Module implementing the single-character type codes and the lookup tables
the grammar and renderer consult.

The tables are built once on first use and handed out as read-only mappings.
A `GHSDemangler` can be given its own tables instead.
"""

from dataclasses import dataclass
from enum import StrEnum
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping


class BaseTypeCode(StrEnum):
    """
    Codes for fundamental types.
    """

    VOID = "v"
    INT = "i"
    SHORT = "s"
    CHAR = "c"
    WIDE_CHAR = "w"
    BOOL = "b"
    FLOAT = "f"
    DOUBLE = "d"
    LONG = "l"
    LONG_LONG = "L"
    ELLIPSIS = "e"
    LONG_DOUBLE = "r"


class ModifierCode(StrEnum):
    """
    Codes for type specifiers, CV qualifiers and pointer/reference markers.
    """

    UNSIGNED = "U"
    SIGNED = "S"
    COMPLEX = "J"
    MEMBER = "M"
    POINTER = "P"
    REFERENCE = "R"
    CONST = "C"
    VOLATILE = "V"
    RESTRICT = "u"


class Position(StrEnum):
    PREFIX = "prefix"
    SUFFIX = "suffix"


@dataclass(frozen=True)
class ModifierKind:
    """
    Where a modifier's text goes relative to the name it modifies, and the text itself.
    """

    position: Position
    text: str

    def is_prefix(self) -> bool:
        return self.position == Position.PREFIX

    @staticmethod
    def on_prefix(text: str) -> "ModifierKind":
        return ModifierKind(position=Position.PREFIX, text=text)

    @staticmethod
    def on_suffix(text: str) -> "ModifierKind":
        return ModifierKind(position=Position.SUFFIX, text=text)


@lru_cache(maxsize=None)
def get_base_types() -> Mapping[str, str]:
    """
    Map of base type code to C++ keyword.
    """
    return MappingProxyType(
        {
            BaseTypeCode.VOID: "void",
            BaseTypeCode.INT: "int",
            BaseTypeCode.SHORT: "short",
            BaseTypeCode.CHAR: "char",
            BaseTypeCode.WIDE_CHAR: "wchar_t",
            BaseTypeCode.BOOL: "bool",
            BaseTypeCode.FLOAT: "float",
            BaseTypeCode.DOUBLE: "double",
            BaseTypeCode.LONG: "long",
            BaseTypeCode.LONG_LONG: "long long",
            BaseTypeCode.ELLIPSIS: "...",
            BaseTypeCode.LONG_DOUBLE: "long double",
        }
    )


@lru_cache(maxsize=None)
def get_name_modifiers() -> Mapping[str, ModifierKind]:
    """
    Map of modifier code to its placement and text.
    """
    return MappingProxyType(
        {
            ModifierCode.UNSIGNED: ModifierKind.on_prefix("unsigned"),
            ModifierCode.SIGNED: ModifierKind.on_prefix("signed"),
            ModifierCode.COMPLEX: ModifierKind.on_prefix("__complex"),
            ModifierCode.MEMBER: ModifierKind.on_prefix("[M]"),
            ModifierCode.POINTER: ModifierKind.on_prefix("*"),
            ModifierCode.REFERENCE: ModifierKind.on_prefix("&"),
            ModifierCode.CONST: ModifierKind.on_prefix("const"),
            ModifierCode.VOLATILE: ModifierKind.on_prefix("volatile"),
            ModifierCode.RESTRICT: ModifierKind.on_prefix("restrict"),
        }
    )


@lru_cache(maxsize=None)
def get_special_names() -> Mapping[str, str]:
    """
    Map of special member names to their spelling.

    `#` in a spelling stands for the name of the enclosing class.
    """
    return MappingProxyType(
        {
            "__ct": "#",
            "__vtbl": "virtual table",
            "__dt": "~#",
            "__as": "operator=",
            "__eq": "operator==",
            "__ne": "operator!=",
            "__gt": "operator>",
            "__lt": "operator<",
            "__ge": "operator>=",
            "__le": "operator<=",
            "__pp": "operator++",
            "__pl": "operator+",
            "__apl": "operator+=",
            "__mi": "operator-",
            "__ami": "operator-=",
            "__ml": "operator*",
            "__amu": "operator*=",
            "__dv": "operator/",
            "__adv": "operator/=",
            "__nw": "operator new",
            "__dl": "operator delete",
            "__vn": "operator new[]",
            "__vd": "operator delete[]",
            "__md": "operator%",
            "__amd": "operator%=",
            "__mm": "operator--",
            "__aa": "operator&&",
            "__oo": "operator||",
            "__or": "operator|",
            "__aor": "operator|=",
            "__er": "operator^",
            "__aer": "operator^=",
            "__ad": "operator&",
            "__aad": "operator&=",
            "__co": "operator~",
            "__cl": "operator",
            "__ls": "operator<<",
            "__als": "operator<<=",
            "__rs": "operator>>",
            "__ars": "operator>>=",
            "__rf": "operator->",
            "__vc": "operator[]",
        }
    )
