"""
Module implementing the name tree produced by the demangler.

Every node is immutable. List-valued fields are tuples, and a node is only ever
reachable from its one parent.
"""

from dataclasses import dataclass
from typing import Union

from ghs_demangler.token import ModifierKind


class _Node:
    def __str__(self) -> str:
        # Deferred import; the renderer depends on this module.
        from ghs_demangler.render import render

        return render(self)


@dataclass(frozen=True)
class Identifier(_Node):
    """
    A literal token: a function, type or namespace segment name.
    """

    text: str


@dataclass(frozen=True)
class BaseType(_Node):
    """
    A fundamental type, stored as its single-character code.
    """

    code: str


@dataclass(frozen=True)
class Modifier(_Node):
    """
    A specifier, qualifier, pointer or reference applied to `inner`.
    """

    kind: ModifierKind
    inner: "Name"


@dataclass(frozen=True)
class WithArguments(_Node):
    callee: "Name"
    args: tuple["Name", ...]


@dataclass(frozen=True)
class Template(_Node):
    base: "Name"
    args: tuple["Name", ...]


@dataclass(frozen=True)
class Namespace(_Node):
    """
    A `Q<n>_` qualified path. The first element is the outermost qualifier.
    """

    path: tuple["Name", ...]


@dataclass(frozen=True)
class InName(_Node):
    """
    `leaf` declared inside the scope `parent`.
    """

    leaf: "Name"
    parent: "Name"


@dataclass(frozen=True)
class WithReturnValue(_Node):
    base: "Name"
    return_type: "Name"


@dataclass(frozen=True)
class FunctionPointer(_Node):
    args: tuple["Name", ...]
    return_type: "Name"


@dataclass(frozen=True)
class ValueArgument(_Node):
    """
    A non-type template argument: the literal text of a value and its type.
    """

    type: "Name"
    literal: str


@dataclass(frozen=True)
class SizedArray(_Node):
    size: int
    element_type: "Name"


Name = Union[
    Identifier,
    BaseType,
    Modifier,
    WithArguments,
    Template,
    Namespace,
    InName,
    WithReturnValue,
    FunctionPointer,
    ValueArgument,
    SizedArray,
]


@dataclass(frozen=True)
class NamesRef:
    """
    `T<index>`: repeat the entry at 1-based `index` of the list being built.
    Only exists while a names list is parsed.
    """

    index: int


@dataclass(frozen=True)
class NamesRepeat:
    """
    `N<count><index>`: append `count` copies of the entry at 1-based `index`.
    Only exists while a names list is parsed.
    """

    count: int
    index: int


NamesItem = Union[Name, NamesRef, NamesRepeat]
