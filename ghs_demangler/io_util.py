"""
Utility functions for working with text streams.
"""

from contextlib import contextmanager
from io import StringIO, TextIOBase
from typing import Callable, Collection, Iterator, Optional, TypeVar

from ghs_demangler.exceptions import ParseError

T = TypeVar("T")


def read_exact(src: TextIOBase, size: int) -> str:
    """
    Read exactly `size` chars from `src`, or raise a ParseError
    """
    value = src.read(size)
    if len(value) != size:
        raise ParseError(f"Unable to read {size} chars; got {value!r}")
    return value


@contextmanager
def peeking(src: TextIOBase) -> Iterator[None]:
    """
    Store the current offset in `src`,
    and restore it at the end of the context.
    """
    ptr = src.tell()
    try:
        yield
    finally:
        src.seek(ptr)


def peek(src: TextIOBase, n: int = 1) -> str:
    """
    Read up to `n` chars from `src` without advancing the offset.
    """
    with peeking(src):
        return src.read(n)


def is_digit(char: str) -> bool:
    """
    Determine if `char` is a single ASCII decimal digit.
    """
    return len(char) == 1 and char.isascii() and char.isdecimal()


def attempt(src: TextIOBase, production: Callable[..., T], *args) -> Optional[T]:
    """
    Run `production` on `src`. If it raises a `ParseError`, rewind `src` to where
    it was before the call and return `None`.

    Any other error propagates untouched.
    """
    ptr = src.tell()
    try:
        return production(src, *args)
    except ParseError:
        src.seek(ptr)
        return None


@contextmanager
def as_stringio(src: str) -> Iterator[StringIO]:
    """Wrap `src` in a `StringIO`, and assert it was fully consumed at the end of the context"""
    buf = StringIO(src)
    yield buf
    leftover = buf.read()
    if leftover:
        raise ParseError(f"Unable to parse full input, leftover chars: {leftover!r}")


def expect(src: TextIOBase, literal: str) -> str:
    """
    Consume and return `literal` from `src`. If the buffer does not continue with
    `literal`, raise a ParseError without consuming anything.
    """
    found = peek(src, len(literal))
    if found != literal:
        raise ParseError(f"Expected {literal!r}, got {found!r}")
    return read_exact(src, len(literal))


def read_one_of(src: TextIOBase, chars: Collection[str]) -> str:
    """
    Consume a single character, which must be one of `chars`.
    """
    char = peek(src)
    if not char or char not in chars:
        raise ParseError(f"Unexpected character {char!r}")
    return read_exact(src, 1)


def read_digit(src: TextIOBase) -> int:
    """
    Consume a single decimal digit and return its value.
    """
    char = peek(src)
    if not is_digit(char):
        raise ParseError(f"Expected to read single decimal digit, got {char!r}!")
    return int(read_exact(src, 1))


def peek_number(src: TextIOBase) -> Optional[tuple[int, int]]:
    """
    Peek subsequent numeric characters from the source and return them as a positive
    base-10 integer.

    The first element of the tuple contains the read count.
    The second element of the tuple contains the offset from the current base which
    points to the first character after the sequence of digits.

    If a number cannot be read, `None` will be returned.
    """

    # Read each digit.
    offset = 0
    number_str = ""

    with peeking(src):
        while is_digit(peek(src)):
            number_str += read_exact(src, 1)
            offset += 1

    if number_str == "":
        return None
    return (int(number_str), offset)


def read_number(src: TextIOBase, allow_zero: bool = False) -> int:
    """
    Read subsequent numeric characters from the source and return them as a positive
    base-10 integer.

    If a number cannot be read, an error will be thrown.
    If the read number is zero and `allow_zero` is False, an error will be thrown.
    """

    result = peek_number(src)

    if not result:
        raise ParseError(f"Unable to parse expected number, got {peek(src)!r}.")

    number, next_offset = result

    if not allow_zero:
        if number == 0:
            raise ParseError("length must be positive")

    read_exact(src, next_offset)
    return number


def read_length_prefixed(src: TextIOBase) -> str:
    """
    Read a length-prefixed string: a run of decimal digits giving the length,
    followed by exactly that many characters.
    """
    length = read_number(src, allow_zero=True)
    return read_exact(src, length)
