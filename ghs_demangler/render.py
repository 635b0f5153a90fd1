"""
Turn a name tree back into readable C++-like text.
"""

from typing import Mapping, Optional

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
from ghs_demangler.token import get_base_types


def render(
    name: Name,
    base_types: Optional[Mapping[str, str]] = None,
    special_names: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Render `name` as text.

    `base_types` defaults to the built-in base type table. If `special_names` is
    given, identifiers found in it (constructors, destructors, operators) are
    spelled out; otherwise they are printed as mangled.
    """
    if base_types is None:
        base_types = get_base_types()
    return _Renderer(base_types, special_names).render(name)


class _Renderer:
    def __init__(self, base_types: Mapping[str, str], special_names: Optional[Mapping[str, str]]):
        self._base_types = base_types
        self._special_names = special_names

    def render(self, name: Name) -> str:
        if isinstance(name, Identifier):
            return self._identifier(name)
        elif isinstance(name, BaseType):
            return self._base_types[name.code]
        elif isinstance(name, Modifier):
            if name.kind.is_prefix():
                return f"{name.kind.text} {self.render(name.inner)}"
            return f"{self.render(name.inner)} {name.kind.text}"
        elif isinstance(name, WithArguments):
            return f"{self.render(name.callee)}({self._join(name.args)})"
        elif isinstance(name, Template):
            return f"{self.render(name.base)}<{self._join(name.args)}>"
        elif isinstance(name, Namespace):
            return "::".join(self.render(n) for n in name.path)
        elif isinstance(name, InName):
            return f"{self.render(name.parent)}::{self._leaf(name.leaf, name.parent)}"
        elif isinstance(name, WithReturnValue):
            return f"{self.render(name.return_type)} {self.render(name.base)}"
        elif isinstance(name, FunctionPointer):
            return f"({self.render(name.return_type)} *({self._join(name.args)}))"
        elif isinstance(name, ValueArgument):
            return f"{name.literal} as {self.render(name.type)}"
        elif isinstance(name, SizedArray):
            return f"{self.render(name.element_type)}[{name.size}]"

        raise TypeError(f"Cannot render {name!r}")

    def _join(self, names: tuple[Name, ...]) -> str:
        return ", ".join(self.render(n) for n in names)

    def _identifier(self, name: Identifier) -> str:
        if self._special_names is not None and name.text in self._special_names:
            spelling = self._special_names[name.text]
            # No enclosing class to stand in for `#`.
            if "#" not in spelling:
                return spelling
        return name.text

    def _leaf(self, leaf: Name, parent: Name) -> str:
        """
        Render the leaf of a qualified name. Special names containing `#` get the
        innermost name of their scope substituted in.
        """
        if (
            self._special_names is not None
            and isinstance(leaf, Identifier)
            and leaf.text in self._special_names
        ):
            return self._special_names[leaf.text].replace("#", self._innermost(parent))
        return self.render(leaf)

    def _innermost(self, scope: Name) -> str:
        """
        Name of the class a qualified name ends in, without template arguments.
        """
        if isinstance(scope, Namespace) and scope.path:
            return self._innermost(scope.path[-1])
        elif isinstance(scope, Template):
            return self._innermost(scope.base)
        elif isinstance(scope, InName):
            return self._innermost(scope.leaf)
        elif isinstance(scope, Identifier):
            return scope.text
        return self.render(scope)
