"""
Tests for demangler.
"""

import logging
from dataclasses import dataclass

import pytest

from ghs_demangler import GHSDemangler, NamesIndexError, ParseError, demangle, parse


@dataclass
class CaseData:
    input: str
    expected: str
    operators: bool = False

    def test(self):
        """
        Run the demangler on the input and verify output matches.
        """
        try:
            actual = GHSDemangler().render(parse(self.input), operators=self.operators)
        except Exception as e:
            raise AssertionError(f"Failed on input `{self.input}`") from e

        assert self.expected == actual, (
            "\n" f"Input:    {self.input}\n" f"Expected: {self.expected}\n" f"Actual:   {actual}\n"
        )


def test_basic():
    """
    Test very basic mangled function names with no special cases.
    """
    test_data = [
        CaseData(input="foo__Fi", expected="foo(int)"),
        CaseData(input="foo__FPci", expected="foo(* char, int)"),
        CaseData(input="foo__Fv", expected="foo(void)"),
        CaseData(input="log__FPCce", expected="log(* const char, ...)"),
        CaseData(
            input="mix__FUlLrwb",
            expected="mix(unsigned long, long long, long double, wchar_t, bool)",
        ),
    ]

    for test in test_data:
        test.test()


def test_plain_names():
    """
    Symbols without any structure are returned as the name itself.
    """
    test_data = [
        CaseData(input="main", expected="main"),
        CaseData(input="__start", expected="__start"),
        CaseData(input="__ghs_foo", expected="__ghs_foo"),
        CaseData(input="foo__bar", expected="foo__bar"),
    ]

    for test in test_data:
        test.test()


def test_qualified():
    """
    Test member functions of classes inside namespaces.
    """
    test_data = [
        CaseData(input="__ct__Q2_3Foo3BarFv", expected="Foo::Bar::__ct(void)"),
        CaseData(
            input="draw__Q2_3gfx6CanvasFRCQ2_3gfx5Pointi",
            expected="gfx::Canvas::draw(& const gfx::Point, int)",
        ),
        CaseData(
            input="push_back__Q2_3std6vectorFRCi",
            expected="std::vector::push_back(& const int)",
        ),
    ]

    for test in test_data:
        test.test()


def test_static_members():
    """
    Both spellings of a static member function demangle to the same name.
    """
    test_data = [
        CaseData(input="count__Q2_3app3Foo__SFv", expected="app::Foo::count(void)"),
        CaseData(input="count__Q2_3app3FooSFv", expected="app::Foo::count(void)"),
    ]

    for test in test_data:
        test.test()


def test_templates():
    """
    Verify that template arguments and return types are demangled correctly.
    """
    test_data = [
        CaseData(input="max__tm__2_iFii_i", expected="int max<int>(int, int)"),
        CaseData(input="get__tm__2_iFv_Pc", expected="* char get<int>(void)"),
        CaseData(input="Buf__tm__8_XiL_1_8", expected="Buf<8 as int>"),
        CaseData(input="Box__tm__4_X1T", expected="Box<T as typename>"),
        CaseData(input="pair__tm__4_iT1", expected="pair<int, int>"),
        CaseData(
            input="size__Q2_3std6vector__tm__2_iCFv",
            expected="std::vector<int>::size(void)",
        ),
    ]

    for test in test_data:
        test.test()


def test_back_references():
    """
    Verify that argument back-references and repeats copy earlier arguments.
    """
    test_data = [
        CaseData(input="swap__FR3FooT1", expected="swap(& Foo, & Foo)"),
        CaseData(input="fill__FiN21", expected="fill(int, int, int)"),
        CaseData(input="fill__FcPcN11", expected="fill(char, * char, char)"),
        CaseData(input="fill__FcPcN12", expected="fill(char, * char, * char)"),
    ]

    for test in test_data:
        test.test()


def test_compound_types():
    """
    Verify that type references, arrays and function pointers are demangled.
    """
    test_data = [
        CaseData(input="take__FZ123Z", expected="take(123)"),
        CaseData(input="take__FZ12_3Z", expected="take(12)"),
        CaseData(input="zero__FPA10_i", expected="zero(* int[10])"),
        CaseData(input="call__FPFi_vi", expected="call(* (void *(int)), int)"),
    ]

    for test in test_data:
        test.test()


def test_thunks_and_compression():
    """
    Verify that thunk prefixes are dropped and compressed symbols are expanded
    before demangling.
    """
    test_data = [
        CaseData(input="__ghs_thunk__0xfffffff8__foo__Fi", expected="foo(int)"),
        CaseData(
            input="__CPR30__bar__Q2_3app3FooFRCQ2_J8JJ12J",
            expected="app::Foo::bar(& const app::Foo)",
        ),
    ]

    for test in test_data:
        test.test()


def test_operators():
    """
    Verify that special names are spelled out when asked to.
    """
    test_data = [
        CaseData(input="__ct__Q2_3Foo3BarFv", expected="Foo::Bar::Bar(void)", operators=True),
        CaseData(input="__dt__Q2_3Foo3BarFv", expected="Foo::Bar::~Bar(void)", operators=True),
        CaseData(
            input="__eq__Q2_3gfx5PointFRCQ2_3gfx5Point",
            expected="gfx::Point::operator==(& const gfx::Point)",
            operators=True,
        ),
        CaseData(input="__dt__Q2_3Foo3BarFv", expected="Foo::Bar::__dt(void)"),
    ]

    for test in test_data:
        test.test()


def test_trailing_characters():
    """
    Characters left over after the top-level name are ignored.
    """
    test_data = [
        CaseData(input="foo__Fi$", expected="foo(int)"),
        CaseData(input="foo__Q3_1a1b", expected="foo"),
        CaseData(input="max__tm__2_iFii_i@@", expected="int max<int>(int, int)"),
    ]

    for test in test_data:
        test.test()

    assert demangle("foo__Fi$") == "foo(int)"

    # The grammar-level entry point stays strict.
    with pytest.raises(ParseError):
        GHSDemangler().parse_function("3foo__Fi$")


def test_fallback():
    """
    Symbols that cannot be demangled are returned unchanged.
    """
    inputs = [
        "",
        "__ghs_thunk__0x1",
        "__ghs_thunk__0xfffffff8__",
        "__CPR__abc",
        "__CPR10__3FooJ99J",
        "foo__FT1",
        "foo__F" + "P" * 5000 + "i",
    ]

    for mangled in inputs:
        assert demangle(mangled) == mangled


def test_fallback_matches_parse():
    """
    `demangle` returns the rendered tree whenever `parse` succeeds.
    """
    for mangled in ["foo__Fi", "max__tm__2_iFii_i", "main"]:
        assert demangle(mangled) == str(parse(mangled))


def test_unresolvable_back_reference():
    """
    A back-reference past the arguments read so far is an error of its own,
    not an ordinary mismatch.
    """
    for mangled in ["foo__FT1", "foo__FN21", "foo__FiT0", "foo__FiT2"]:
        with pytest.raises(NamesIndexError):
            parse(mangled)


def test_unresolvable_back_reference_is_logged_as_error(caplog):
    """
    `demangle` still falls back on a bad back-reference, but reports it at
    error level, unlike an ordinary failure.
    """
    with caplog.at_level(logging.DEBUG, logger="ghs_demangler"):
        assert demangle("foo__FT1") == "foo__FT1"
    assert [r.levelno for r in caplog.records if r.levelno >= logging.ERROR] == [logging.ERROR]

    caplog.clear()
    with caplog.at_level(logging.DEBUG, logger="ghs_demangler"):
        assert demangle("__CPR__abc") == "__CPR__abc"
    assert caplog.records
    assert all(r.levelno < logging.ERROR for r in caplog.records)


def test_deterministic():
    """
    Demangling the same symbol twice yields equal trees and equal text.
    """
    demangler = GHSDemangler()
    for mangled in ["draw__Q2_3gfx6CanvasFRCQ2_3gfx5Pointi", "swap__FR3FooT1"]:
        first = demangler.parse(mangled)
        second = demangler.parse(mangled)
        assert first == second
        assert demangler.render(first) == demangler.render(second)
