"""
Demangler for Green Hills C++ symbols.

The grammar is ambiguous, so every production is an ordered list of
alternatives: each alternative is tried from the same buffer position and the
first one that parses wins. A failed alternative raises `ParseError` and the
buffer is rewound before the next one is tried.

Examples:
foo__Fi                          foo(int)
__ct__Q2_3app3FooFv              app::Foo::__ct(void)
max__tm__2_iFii_i                int max<int>(int, int)
swap__FR3FooT1                   swap(& Foo, & Foo)
"""

import copy
from io import StringIO, TextIOBase
from logging import getLogger
from typing import Callable, Mapping, Optional

from ghs_demangler.decompress import decompress
from ghs_demangler.exceptions import DemangleError, NamesIndexError, ParseError
from ghs_demangler.io_util import (
    as_stringio,
    attempt,
    expect,
    peek,
    read_digit,
    read_exact,
    read_length_prefixed,
    read_number,
    read_one_of,
)
from ghs_demangler.names import (
    BaseType,
    FunctionPointer,
    Identifier,
    InName,
    Modifier,
    Name,
    NamesItem,
    NamesRef,
    NamesRepeat,
    Namespace,
    SizedArray,
    Template,
    ValueArgument,
    WithArguments,
    WithReturnValue,
)
from ghs_demangler.render import render
from ghs_demangler.splitter import split
from ghs_demangler.token import ModifierKind, get_base_types, get_name_modifiers, get_special_names

_logger = getLogger(__name__)

DUNDER = "__"
STATIC_MARKER = "__S"
TEMPLATE_MARKER = "__tm__"
ARGUMENT_TAGS = ("F", "CF", "SF")
TYPENAME = "typename"


class GHSDemangler:
    """
    Demangler object.

    The lookup tables default to the built-in ones. The object holds no state
    between calls.
    """

    def __init__(
        self,
        base_types: Optional[Mapping[str, str]] = None,
        modifiers: Optional[Mapping[str, ModifierKind]] = None,
        special_names: Optional[Mapping[str, str]] = None,
    ):
        self._base_types = get_base_types() if base_types is None else base_types
        self._modifiers = get_name_modifiers() if modifiers is None else modifiers
        self._special_names = get_special_names() if special_names is None else special_names

    def parse(self, symbol: str) -> Name:
        """
        Run the full pipeline on a raw symbol and return its name tree.

        Trailing characters that no production accepts are ignored.
        Raises a `DemangleError` subclass if the symbol cannot be demangled.
        """
        src = StringIO(split(decompress(symbol)))
        name = self._read_function(src)
        leftover = src.read()
        if leftover:
            _logger.debug("Ignoring trailing %r in %r", leftover, symbol)
        return name

    def demangle(self, symbol: str, operators: bool = False) -> str:
        """
        Demangle `symbol` to text. If that fails for any reason, `symbol` is
        returned unchanged.
        """
        try:
            return self.render(self.parse(symbol), operators=operators)
        except NamesIndexError:
            _logger.error("Unsupported back-reference in %r", symbol, exc_info=True)
        except DemangleError as e:
            _logger.debug("Unable to demangle %r: %s", symbol, e)
        except RecursionError:
            _logger.debug("Unable to demangle %r: nested too deeply", symbol)
        return symbol

    def render(self, name: Name, operators: bool = False) -> str:
        """
        Render a name tree with this demangler's tables.
        """
        special_names = self._special_names if operators else None
        return render(name, base_types=self._base_types, special_names=special_names)

    def parse_function(self, text: str) -> Name:
        """
        Parse an already length-prefixed symbol, which must be consumed entirely.
        """
        with as_stringio(text) as buf:
            return self._read_function(buf)

    def parse_name(self, text: str) -> Name:
        """
        Parse `text` as a single name, which must be consumed entirely.
        """
        with as_stringio(text) as buf:
            return self._read_name(buf)

    def parse_names(self, text: str) -> list[Name]:
        """
        Parse `text` as a names list, which must be consumed entirely.
        """
        with as_stringio(text) as buf:
            return self._read_names(buf)

    def _read_function(self, src: TextIOBase) -> Name:
        """
        Read the top-level name along with its argument lists, return types and
        enclosing scopes.
        """
        name = self._read_name(src)

        while True:
            if attempt(src, expect, STATIC_MARKER) is not None:
                # TODO: mark the name as a static member function once `Name` can carry it.
                continue

            args = attempt(src, self._read_arguments)
            if args is not None:
                name = WithArguments(callee=name, args=tuple(args))
                continue

            return_type = attempt(src, self._read_prefixed_name, "_")
            if return_type is not None:
                name = WithReturnValue(base=name, return_type=return_type)
                continue

            parent = attempt(src, self._read_prefixed_name, DUNDER)
            if parent is not None:
                name = InName(leaf=name, parent=parent)
                continue

            return name

    def _read_arguments(self, src: TextIOBase) -> list[Name]:
        """
        Read `[__](F|CF|SF)<names>`.
        """
        attempt(src, expect, DUNDER)
        for tag in ARGUMENT_TAGS:
            if attempt(src, expect, tag) is not None:
                return self._read_names(src)
        raise ParseError(f"Expected argument list, got {peek(src, 2)!r}")

    def _read_prefixed_name(self, src: TextIOBase, prefix: str) -> Name:
        expect(src, prefix)
        return self._read_name(src)

    def _name_productions(self) -> tuple[Callable[[TextIOBase], Name], ...]:
        return (
            self._read_identifier,
            self._read_namespace,
            self._read_modifier,
            self._read_type_ref,
            self._read_base_type,
            self._read_function_pointer,
            self._read_sized_array,
        )

    def _read_name(self, src: TextIOBase) -> Name:
        """
        Read a name, followed by any number of template argument lists and
        enclosing scopes.
        """
        for production in self._name_productions():
            name = attempt(src, production)
            if name is not None:
                break
        else:
            raise ParseError(f"No name at {peek(src, 8)!r}")

        while True:
            args = attempt(src, self._read_template)
            if args is not None:
                name = Template(base=name, args=tuple(args))
                continue

            parent = attempt(src, self._read_prefixed_name, DUNDER)
            if parent is not None:
                name = InName(leaf=name, parent=parent)
                continue

            return name

    def _read_identifier(self, src: TextIOBase) -> Name:
        return Identifier(text=read_length_prefixed(src))

    def _read_namespace(self, src: TextIOBase) -> Name:
        """
        Read `Q<depth>_` followed by exactly `depth` names.
        """
        expect(src, "Q")
        depth = read_digit(src)
        expect(src, "_")
        return Namespace(path=tuple(self._read_name(src) for _ in range(depth)))

    def _read_modifier(self, src: TextIOBase) -> Name:
        code = read_one_of(src, self._modifiers)
        return Modifier(kind=self._modifiers[code], inner=self._read_name(src))

    def _read_type_ref(self, src: TextIOBase) -> Name:
        """
        Read `Z<id>[_<n>]Z`. Only the id is kept.
        """
        expect(src, "Z")
        type_id = read_number(src, allow_zero=True)
        if attempt(src, expect, "_") is not None:
            read_number(src, allow_zero=True)
        expect(src, "Z")
        return Identifier(text=str(type_id))

    def _read_base_type(self, src: TextIOBase) -> Name:
        return BaseType(code=read_one_of(src, self._base_types))

    def _read_function_pointer(self, src: TextIOBase) -> Name:
        """
        Read `F<names>_<return type>`.
        """
        expect(src, "F")
        args = self._read_names(src)
        expect(src, "_")
        return FunctionPointer(args=tuple(args), return_type=self._read_name(src))

    def _read_sized_array(self, src: TextIOBase) -> Name:
        """
        Read `A<size>_<element type>`.
        """
        expect(src, "A")
        size = read_number(src, allow_zero=True)
        expect(src, "_")
        return SizedArray(size=size, element_type=self._read_name(src))

    def _read_template(self, src: TextIOBase) -> list[Name]:
        """
        Read `__tm__<n><separator><names>`. The arguments live inside a
        length-prefixed string and must use up all of it.
        """
        expect(src, TEMPLATE_MARKER)
        body = read_length_prefixed(src)
        if not body:
            raise ParseError("Empty template argument string")

        with as_stringio(body[1:]) as buf:
            return self._read_names(buf)

    def _read_names(self, src: TextIOBase) -> list[Name]:
        """
        Read a list of names, resolving back-references and repeats as they
        appear. An item that matches no production ends the list.
        """
        names: list[Name] = []
        while True:
            item = self._read_names_item(src)
            if item is None:
                return names
            self._resolve_item(names, item)

    def _read_names_item(self, src: TextIOBase) -> Optional[NamesItem]:
        for production in (
            self._read_name,
            self._read_names_ref,
            self._read_names_repeat,
            self._read_value_argument,
        ):
            item = attempt(src, production)
            if item is not None:
                return item
        return None

    def _resolve_item(self, names: list[Name], item: NamesItem):
        """
        Append `item` to `names`, replacing references by copies of earlier entries.
        """
        if isinstance(item, NamesRef):
            names.append(copy.deepcopy(self._lookup(names, item.index)))
        elif isinstance(item, NamesRepeat):
            target = self._lookup(names, item.index)
            names.extend(copy.deepcopy(target) for _ in range(item.count))
        else:
            names.append(item)

    @staticmethod
    def _lookup(names: list[Name], index: int) -> Name:
        if not 1 <= index <= len(names):
            raise NamesIndexError(index, len(names))
        return names[index - 1]

    def _read_names_ref(self, src: TextIOBase) -> NamesItem:
        expect(src, "T")
        return NamesRef(index=read_digit(src))

    def _read_names_repeat(self, src: TextIOBase) -> NamesItem:
        expect(src, "N")
        count = read_digit(src)
        return NamesRepeat(count=count, index=read_digit(src))

    def _read_value_argument(self, src: TextIOBase) -> Name:
        """
        Read `X<n><literal>`, a bare value whose type is `typename`, or
        `X<type>L_<n>_<literal>`.
        """
        expect(src, "X")
        literal = attempt(src, read_length_prefixed)
        if literal is not None:
            return ValueArgument(type=Identifier(text=TYPENAME), literal=literal)

        value_type = self._read_name(src)
        expect(src, "L_")
        length = read_number(src, allow_zero=True)
        expect(src, "_")
        return ValueArgument(type=value_type, literal=read_exact(src, length))


def parse(mangled: str) -> Name:
    p = GHSDemangler()
    result = p.parse(mangled)
    return result


def demangle(mangled: str, operators: bool = False) -> str:
    return GHSDemangler().demangle(mangled, operators=operators)
