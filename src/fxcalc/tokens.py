'''
Lexemes of the infix expression grammar.

Every kind is a frozen dataclass, so tokens are immutable and compare equal
only to tokens of the same kind.
'''

from dataclasses import dataclass


class Token:
    __slots__ = ()


@dataclass(frozen=True)
class Number(Token):
    value: float

    def __str__(self):
        return '{:g}'.format(self.value)


@dataclass(frozen=True)
class Operator(Token):
    symbol: str
    # Set on the × the lexer injects for a leading minus sign.
    unary: bool = False

    def __str__(self):
        return self.symbol


@dataclass(frozen=True)
class Function(Token):
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Constant(Token):
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Variable(Token):
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class LParen(Token):
    def __str__(self):
        return '('


@dataclass(frozen=True)
class RParen(Token):
    def __str__(self):
        return ')'


@dataclass(frozen=True)
class Comma(Token):
    def __str__(self):
        return ','


TOKEN_TYPES = (Number, Operator, Function, Constant, Variable,
               LParen, RParen, Comma)
