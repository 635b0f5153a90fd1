"""
Tests for the command line interface.
"""

import pytest

from ghs_demangler import DecompressionError
from ghs_demangler.cli import main


def test_symbols(capsys):
    main(["foo__Fi", "main", "__CPR__abc", "foo__Fi$"])
    assert capsys.readouterr().out == "foo(int)\nmain\n__CPR__abc\nfoo(int)\n"


def test_file(tmp_path, capsys):
    path = tmp_path / "symbols.txt"
    path.write_text("foo__Fi\n\n__ct__Q2_3Foo3BarFv\n")

    main(["--file", str(path)])
    assert capsys.readouterr().out == "foo(int)\nFoo::Bar::__ct(void)\n"


def test_operators(capsys):
    main(["-o", "__ct__Q2_3Foo3BarFv"])
    assert capsys.readouterr().out == "Foo::Bar::Bar(void)\n"


def test_tree(capsys):
    main(["--tree", "main", "__CPR__abc"])
    assert capsys.readouterr().out == "Identifier(text='main')\nIdentifier(text='__CPR__abc')\n"


def test_error_on_failure():
    with pytest.raises(DecompressionError):
        main(["-e", "__CPR__abc"])
