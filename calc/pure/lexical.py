"""Lexical analysis for the calc language: turns a line of text into a stream of tokens.

The token grammar can be loosely defined as follows, where each rule is attempted in order and the first match wins:

```
<assign>     ::= <identifier> <whitespace>* "="   ; "=" must not be followed by ">"
<identifier> ::= [A-Za-z_] [A-Za-z0-9_]*
<number>     ::= [0-9.]+                          ; at most one "."
<func_arrow> ::= "=>"
<operator>   ::= "+" | "-" | "*" | "/" | "%"
<bracket>    ::= "(" | ")"
```

Whitespace between tokens is skipped by tokenize, never by the token matchers themselves.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum

from calc.lang.error import EvalError, LexError
from calc.lang.numerical import f32, to_int64, truncated_mod
from calc.lang.numerical import number as number_text


IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
NUMBER = re.compile(r"[0-9.]+")


class Operator(Enum):
    """Binary arithmetic operators. value is the operator's symbol."""
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"

    @property
    def priority(self):
        """Add/Sub = 1, Mul/Div/Mod = 2. Atomic and bracketed expressions are 0."""
        return 1 if self in (Operator.ADD, Operator.SUB) else 2

    def eval(self, left, right):
        """Applies operator to left and right using 32-bit float arithmetic. Modulo truncates both operands to 64-bit
        integers first, so 11.9 % 2.5 == 1.
        """
        if self is Operator.ADD:
            return f32(left + right)
        elif self is Operator.SUB:
            return f32(left - right)
        elif self is Operator.MUL:
            return f32(left * right)
        elif self is Operator.DIV:
            if right == 0:  # IEEE division instead of ZeroDivisionError
                if left == 0 or math.isnan(left):
                    return math.nan
                return math.copysign(math.inf, left) * math.copysign(1.0, right)
            return f32(left / right)

        divisor = to_int64(right)
        if divisor == 0:
            raise EvalError("modulo by zero: '{} % {}'", (number_text(left), number_text(right)))
        return f32(truncated_mod(to_int64(left), divisor))


class Token:
    """Superclass of all tokens. Tokens are compared structurally."""


@dataclass(frozen=True)
class Id(Token):
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Number(Token):
    value: float

    def __str__(self):
        return number_text(self.value)


@dataclass(frozen=True)
class Op(Token):
    operator: Operator

    def __str__(self):
        return self.operator.value


@dataclass(frozen=True)
class LBracket(Token):

    def __str__(self):
        return "("


@dataclass(frozen=True)
class RBracket(Token):

    def __str__(self):
        return ")"


@dataclass(frozen=True)
class Assign(Token):
    """Assignment is a compound token, 'x =', carrying the variable which is assigned to."""
    name: str

    def __str__(self):
        return f"{self.name} ="


@dataclass(frozen=True)
class FuncArrow(Token):

    def __str__(self):
        return "=>"


SINGLES = {
    "+": Op(Operator.ADD),
    "-": Op(Operator.SUB),
    "*": Op(Operator.MUL),
    "/": Op(Operator.DIV),
    "%": Op(Operator.MOD),
    "(": LBracket(),
    ")": RBracket(),
}


def identifier(src):
    """Returns (tail, name) if src starts with an identifier, else (src, None)."""
    match = IDENTIFIER.match(src)
    if match is None:
        return src, None
    return src[match.end():], match.group()


def number(src):
    """Returns (tail, value) if src starts with a number literal, else (src, None). Raises LexError if the literal has
    more than one decimal point or is nothing but a decimal point.
    """
    match = NUMBER.match(src)
    if match is None:
        return src, None

    literal = match.group()
    if literal.count(".") > 1:
        raise LexError("Invalid number: {}, only one decimal point allowed", literal)
    try:
        value = f32(float(literal))
    except ValueError:
        raise LexError("Invalid number: {}", literal)

    return src[match.end():], value


def assignment(src):
    """Returns (tail, name) if src starts with 'name =' (not 'name =>'), else (src, None)."""
    tail, name = identifier(src)
    if name is None:
        return src, None

    tail = tail.lstrip()
    if tail.startswith("=") and not tail.startswith("=>"):
        return tail[1:], name
    return src, None


def next_token(src):
    """Returns (tail, token) for the token at the very start of src, or (src, None) if src is empty. Raises LexError if
    src starts with something that is not a token.
    """
    if not src:
        return "", None

    tail, name = assignment(src)
    if name is not None:
        return tail, Assign(name)

    tail, name = identifier(src)
    if name is not None:
        return tail, Id(name)

    tail, value = number(src)
    if value is not None:
        return tail, Number(value)

    if src.startswith("=>"):
        return src[2:], FuncArrow()

    if src[0] in SINGLES:
        return src[1:], SINGLES[src[0]]

    raise LexError("Invalid token: '{}'", src, end=1)


def tokenize(line):
    """Lazily yields the tokens of line. Raises LexError (located within line) on the first invalid token, after which
    nothing more is yielded.
    """
    src = line.lstrip()
    while True:
        offset = len(line) - len(src)
        try:
            src, token = next_token(src)
        except LexError as error:
            raise error.relocate(line, offset)

        if token is None:
            return
        yield token
        src = src.lstrip()
