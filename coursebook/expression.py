"""Tokenizer and parser for a tiny expression language of sums and differences."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Union

_U32_MAX = 2**32 - 1
_DIGITS = frozenset("0123456789")
_LOWER = frozenset("abcdefghijklmnopqrstuvwxyz")
_IDENT_REST = _LOWER | _DIGITS | {"_"}


class Op(Enum):
    """An arithmetic operator."""

    ADD = "+"
    SUB = "-"


@dataclass(frozen=True)
class NumberToken:
    """A run of digits."""

    text: str


@dataclass(frozen=True)
class IdentifierToken:
    """A variable name."""

    name: str


@dataclass(frozen=True)
class OperatorToken:
    """An operator symbol."""

    op: Op


Token = Union[NumberToken, IdentifierToken, OperatorToken]


@dataclass(frozen=True)
class Var:
    """A reference to a variable."""

    name: str


@dataclass(frozen=True)
class Number:
    """A literal number."""

    value: int


@dataclass(frozen=True)
class Operation:
    """A binary operation."""

    left: Expression
    op: Op
    right: Expression


Expression = Union[Var, Number, Operation]


class TokenizerError(ValueError):
    """Raised on a character that starts no token."""

    def __init__(self, character: str) -> None:
        super().__init__(f"Unexpected character '{character}' in input")
        self.character = character


class ParserError(ValueError):
    """Raised when the input is not a valid expression."""


class UnexpectedEndOfInput(ParserError):
    """Raised when the input ends where an operand is expected."""

    def __init__(self) -> None:
        super().__init__("Unexpected end of input")


class UnexpectedToken(ParserError):
    """Raised on a token that cannot appear where it does."""

    def __init__(self, token: Token) -> None:
        super().__init__(f"Unexpected token {token!r}")
        self.token = token


class InvalidNumber(ParserError):
    """Raised when a number does not fit in 32 unsigned bits."""

    def __init__(self, text: str) -> None:
        super().__init__("Invalid number")
        self.text = text


def tokenize(text: str) -> Iterator[Token]:
    """Yield the tokens of ``text``, raising TokenizerError on a bad character."""
    position = 0
    while position < len(text):
        char = text[position]
        start = position
        position += 1
        if char in _DIGITS:
            while position < len(text) and text[position] in _DIGITS:
                position += 1
            yield NumberToken(text[start:position])
        elif char in _LOWER:
            while position < len(text) and text[position] in _IDENT_REST:
                position += 1
            yield IdentifierToken(text[start:position])
        elif char == "+":
            yield OperatorToken(Op.ADD)
        elif char == "-":
            yield OperatorToken(Op.SUB)
        else:
            raise TokenizerError(char)


def parse(text: str) -> Expression:
    """Parse ``text``; operations group to the right."""
    tokens = tokenize(text)

    def next_token() -> Token | None:
        try:
            return next(tokens, None)
        except TokenizerError as error:
            raise ParserError(f"Tokenizer error: {error}") from error

    operands: list[Expression] = []
    operators: list[Op] = []
    while True:
        token = next_token()
        if token is None:
            raise UnexpectedEndOfInput()
        if isinstance(token, NumberToken):
            value = int(token.text)
            if value > _U32_MAX:
                raise InvalidNumber(token.text)
            operands.append(Number(value))
        elif isinstance(token, IdentifierToken):
            operands.append(Var(token.name))
        else:
            raise UnexpectedToken(token)

        following = next_token()
        if following is None:
            break
        if not isinstance(following, OperatorToken):
            raise UnexpectedToken(following)
        operators.append(following.op)

    expression = operands.pop()
    for op, left in zip(reversed(operators), reversed(operands)):
        expression = Operation(left, op, expression)
    return expression


def main(argv: list[str] | None = None) -> int:
    """Parse a sample expression and print it."""
    try:
        expression = parse("10+foo+20-30")
    except ParserError as error:
        print(error, file=sys.stderr)
        return 1
    print(repr(expression))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())